# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core orchestration for moddeps.

This module provides the high-level functions behind the CLI commands. They
coordinate the declarations loader, the platform catalog, the resolution
loop, the materializer and the properties file.

Run Model:

- The properties file is read once before any resolution and written once
  after all of them, so results of unrelated dependencies never race.
- Declarations are loaded and validated before any network activity.
- Dependencies are resolved in parallel (one worker per dependency, bounded
  by ``max_workers``); the trials of one dependency stay sequential.
- With ``tolerable`` a failing dependency is logged and skipped; otherwise
  the first failure (in declaration order) aborts the run and nothing is
  written.

Design Principles:

- Functions return structured data (dataclasses) for easy testing
- Error handling uses exceptions; the CLI layer formats them for display
- Network collaborators (listing source, platform catalog, sleep) are
  injectable

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from moddeps.config import load_settings
        from moddeps.core import update_properties

        result = update_properties(
            Path("modding-dependencies.yml"),
            Path("gradle.properties"),
            settings=load_settings(update_platform_patch=True),
        )
        print(f"{result.updated_count}/{result.total_count} properties updated")
        ```

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import time

from moddeps.config.loader import load_dependencies
from moddeps.config.settings import RunSettings
from moddeps.dependency import Dependency
from moddeps.discovery import MavenListingSource, fetch_platform_patches
from moddeps.discovery.base import ListingSource
from moddeps.exceptions import ConfigError, ModdepsError
from moddeps.logging import Logger, get_global_logger
from moddeps.materializer import materialize_properties
from moddeps.resolver import resolve_dependency
from moddeps.results import (
    PropertyChange,
    Resolution,
    ResolveResult,
    SkippedDependency,
    UpdateResult,
)
from moddeps.state import load_properties, save_properties
from moddeps.versioning import PlatformVersion

PLATFORM_VERSION_KEY = "minecraft_version"
DEFAULT_PROPERTIES_FILE = "gradle.properties"

Outcome = Resolution | ModdepsError


def resolve_all(
    dependencies: Sequence[Dependency],
    target: PlatformVersion,
    source: ListingSource,
    *,
    max_workers: int = 8,
    delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    logger: Logger | None = None,
) -> list[Outcome]:
    """Resolve dependencies in parallel.

    Args:
        dependencies: Declarations to resolve.
        target: Target platform version.
        source: Listing source shared by all workers.
        max_workers: Maximum number of concurrent resolutions.
        delay: Politeness delay between queries of one dependency.
        sleep: Sleep function, injectable for tests.
        logger: Logger instance; defaults to the global logger.

    Returns:
        One outcome per dependency, in declaration order: the Resolution,
            or the ModdepsError that stopped it.

    """
    logger = logger if logger is not None else get_global_logger()
    if not dependencies:
        return []

    def _resolve(dependency: Dependency) -> Outcome:
        try:
            return resolve_dependency(
                dependency, target, source, delay=delay, sleep=sleep, logger=logger
            )
        except ModdepsError as err:
            return err

    workers = max(1, min(max_workers, len(dependencies)))
    logger.verbose(
        "RESOLVE",
        f"Resolving {len(dependencies)} dependency(ies) for {target} "
        f"with {workers} worker(s)",
    )
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_resolve, dependencies))


def _collect(
    dependencies: Sequence[Dependency],
    outcomes: list[Outcome],
    tolerable: bool,
    logger: Logger,
) -> tuple[list[tuple[Dependency, Resolution]], list[SkippedDependency]]:
    """Split outcomes into resolutions and skips, raising if not tolerable."""
    resolved: list[tuple[Dependency, Resolution]] = []
    skipped: list[SkippedDependency] = []
    for index, (dependency, outcome) in enumerate(zip(dependencies, outcomes)):
        if isinstance(outcome, Resolution):
            resolved.append((dependency, outcome))
            continue
        if not tolerable:
            raise outcome
        logger.warning(
            "RESOLVE",
            f"Skipping dependencies[{index}] ({dependency.coordinates}): {outcome}",
        )
        skipped.append(SkippedDependency(index, dependency.coordinates, str(outcome)))
    return resolved, skipped


def _target_platform(
    current: PlatformVersion,
    fetch_patches: Callable[[], dict[int, int]],
    logger: Logger,
) -> PlatformVersion:
    patches = fetch_patches()
    latest = patches.get(current.minor)
    if latest is None:
        logger.warning(
            "PLATFORM",
            f"No release found for minor version {current.minor}; "
            f"keeping {current}",
        )
        return current
    return max(current, current.with_patch(latest))


def update_properties(
    config_path: Path,
    properties_path: Path,
    *,
    settings: RunSettings | None = None,
    source: ListingSource | None = None,
    fetch_patches: Callable[[], dict[int, int]] = fetch_platform_patches,
    sleep: Callable[[float], None] = time.sleep,
    logger: Logger | None = None,
) -> UpdateResult:
    """Bring the properties file up to date with the declared dependencies.

    This is the main entry point for the 'moddeps update' command.

    Steps:

    1. Read the properties file; ``minecraft_version`` must be present
    2. Load and validate the declarations (no network yet)
    3. Optionally move the platform version to its latest released patch
    4. Resolve every dependency in parallel (unless
       ``update_only_with_platform`` is set and the platform did not change)
    5. Materialize and merge the properties in declaration order
    6. Write the file once (unless ``dry_run``)

    Args:
        config_path: Path to the declarations YAML file.
        properties_path: Path to ``gradle.properties``.
        settings: Run settings. Defaults to RunSettings().
        source: Listing source. Defaults to MavenListingSource().
        fetch_patches: Platform catalog lookup, returning the latest patch
            per minor version.
        sleep: Sleep function used for the trial delay.
        logger: Logger instance; defaults to the global logger.

    Returns:
        Platform versions before/after, every property change and the
            dependencies that were skipped.

    Raises:
        ConfigError: On invalid declarations or a properties file without
            ``minecraft_version``.
        NetworkError: If the platform catalog cannot be fetched.
        ResolutionError: If a dependency cannot be resolved and
            ``tolerable`` is not set.

    Example:
        Dry run with tolerated failures:
            ```python
            from moddeps.config import RunSettings

            result = update_properties(
                Path("modding-dependencies.yml"),
                Path("gradle.properties"),
                settings=RunSettings(tolerable=True, dry_run=True),
            )
            for change in result.changes:
                print(change.name, change.old_value, "=>", change.new_value)
            ```

    """
    logger = logger if logger is not None else get_global_logger()
    settings = settings if settings is not None else RunSettings()
    source = source if source is not None else MavenListingSource(logger=logger)

    # 1. Read properties once
    logger.step(1, 4, "Reading properties...")
    props = load_properties(properties_path)
    current_text = props.get(PLATFORM_VERSION_KEY)
    if current_text is None:
        raise ConfigError(f"{PLATFORM_VERSION_KEY} is not found in {properties_path}")
    current = PlatformVersion.parse(current_text)
    logger.verbose("PROPERTIES", f"{PLATFORM_VERSION_KEY} = {current_text}")

    # 2. Load declarations before any network activity
    dependencies = load_dependencies(config_path, logger=logger)

    # 3. Platform version
    logger.step(2, 4, "Checking platform version...")
    target = current
    if settings.update_platform_patch:
        target = _target_platform(current, fetch_patches, logger)
        if target > current:
            logger.info(
                "PLATFORM",
                f"{PLATFORM_VERSION_KEY}: {current_text} => {target}",
            )
            props.set(PLATFORM_VERSION_KEY, str(target))
        else:
            logger.info(
                "PLATFORM",
                f"{PLATFORM_VERSION_KEY}: {current_text} => {target} (no change)",
            )
    else:
        logger.verbose("PLATFORM", f"Skip updating {PLATFORM_VERSION_KEY}")

    # 4. Resolve
    logger.step(3, 4, "Resolving dependencies...")
    changes: list[PropertyChange] = []
    skipped: list[SkippedDependency] = []
    resolve_deps = not settings.update_only_with_platform or target > current
    if resolve_deps:
        outcomes = resolve_all(
            dependencies,
            target,
            source,
            max_workers=settings.max_workers,
            delay=settings.trial_delay,
            sleep=sleep,
            logger=logger,
        )
        resolved, skipped = _collect(
            dependencies, outcomes, settings.tolerable, logger
        )

        # 5. Materialize and merge in declaration order
        for dependency, resolution in resolved:
            for name, value in materialize_properties(dependency, resolution).items():
                change = PropertyChange(name, props.get(name), value)
                props.set(name, value)
                changes.append(change)
                suffix = "" if change.changed else " (no change)"
                logger.info(
                    "PROPERTIES", f"{name}: {change.old_value} => {value}{suffix}"
                )
    else:
        logger.info(
            "RESOLVE",
            f"{PLATFORM_VERSION_KEY} unchanged; skipping dependency resolution",
        )

    # 6. Write once
    logger.step(4, 4, "Writing properties...")
    written = False
    if settings.dry_run:
        logger.info("PROPERTIES", f"Dry run; {properties_path} not written")
    else:
        save_properties(props, properties_path)
        written = True

    result = UpdateResult(
        platform_before=current,
        platform_after=target,
        changes=changes,
        skipped=skipped,
        dependencies_resolved=resolve_deps,
        written=written,
    )
    logger.info(
        "RESOLVE",
        f"{result.updated_count}/{result.total_count} properties updated",
    )
    return result


def resolve_config(
    config_path: Path,
    platform_version: PlatformVersion,
    *,
    settings: RunSettings | None = None,
    source: ListingSource | None = None,
    sleep: Callable[[float], None] = time.sleep,
    logger: Logger | None = None,
) -> ResolveResult:
    """Resolve declarations for a platform version without writing anything.

    This is the entry point for the 'moddeps resolve' command.

    Args:
        config_path: Path to the declarations YAML file.
        platform_version: Platform version to resolve against.
        settings: Run settings (tolerable, trial_delay and max_workers are
            used). Defaults to RunSettings().
        source: Listing source. Defaults to MavenListingSource().
        sleep: Sleep function used for the trial delay.
        logger: Logger instance; defaults to the global logger.

    Returns:
        Resolutions and materialized properties.

    Raises:
        ConfigError: On invalid declarations.
        ResolutionError: If a dependency cannot be resolved and
            ``tolerable`` is not set.

    """
    logger = logger if logger is not None else get_global_logger()
    settings = settings if settings is not None else RunSettings()
    source = source if source is not None else MavenListingSource(logger=logger)

    dependencies = load_dependencies(config_path, logger=logger)
    outcomes = resolve_all(
        dependencies,
        platform_version,
        source,
        max_workers=settings.max_workers,
        delay=settings.trial_delay,
        sleep=sleep,
        logger=logger,
    )
    resolved, skipped = _collect(dependencies, outcomes, settings.tolerable, logger)

    properties: dict[str, str] = {}
    for dependency, resolution in resolved:
        properties.update(materialize_properties(dependency, resolution))

    return ResolveResult(
        platform_version=platform_version,
        resolutions=[resolution for _, resolution in resolved],
        properties=properties,
        skipped=skipped,
    )
