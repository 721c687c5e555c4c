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

"""Resolution loop for moddeps.

Finds the best published version of one dependency for a target platform
version. Mods are often published only for the first patch of a minor
release, so the loop walks down the patch numbers until something matches.

Trial Order:
    1. WITH_PATCH pass: patch from ``target.patch`` down to 0, with
       ``${mcVersion}`` rendered as ``major.minor.patch``.
    2. WITHOUT_PATCH pass: patch 0 only, with ``${mcVersion}`` rendered as
       ``major.minor`` (e.g. ``1.20`` instead of ``1.20.0``).

Per Trial:
    - Contextualize the artifact id and version expression.
    - Query the listing source, unless the artifact id equals the previous
      trial's; then the previous outcome (listing or failure) is reused.
    - A failed query is logged and the loop advances to the next trial.
    - Every matching listed version is ranked by its captures; on ties the
      later listed version wins.
    - The first trial with at least one match ends the loop.

Rate Control:
    Every actual query after the first one of a loop is preceded by
    ``sleep(delay)``. Reused outcomes do not wait.

Example:
    ```python
    from moddeps.discovery import MavenListingSource
    from moddeps.resolver import resolve_dependency
    from moddeps.versioning import PlatformVersion

    resolution = resolve_dependency(
        dependency, PlatformVersion(1, 20, 4), MavenListingSource()
    )
    print(resolution.artifact_id, resolution.version)
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum
import time

from moddeps.dependency import ContextualizedDependency, Dependency, MatchResult
from moddeps.discovery.base import ListingSource
from moddeps.exceptions import ListingQueryFailed, NoMatchFound
from moddeps.logging import Logger, get_global_logger
from moddeps.pattern import ResolutionContext, expand_contextual
from moddeps.results import Resolution
from moddeps.versioning import DependencyVersion, PlatformVersion

DEFAULT_TRIAL_DELAY = 1.0


class TrialPass(Enum):
    """Which rendering of ``${mcVersion}`` a trial uses."""

    WITH_PATCH = "with_patch"
    WITHOUT_PATCH = "without_patch"


def trial_contexts(target: PlatformVersion) -> Iterator[ResolutionContext]:
    """Yield the resolution contexts of every trial, in order.

    Example:
        ```python
        [expand_contextual("mcVersion", c) for c in trial_contexts(PlatformVersion(1, 20, 2))]
        # ["1.20.2", "1.20.1", "1.20.0", "1.20"]
        ```
    """
    state: tuple[TrialPass, int] | None = (TrialPass.WITH_PATCH, target.patch)
    while state is not None:
        trial_pass, patch = state
        yield ResolutionContext(
            platform_version=target.with_patch(patch),
            omit_patch=trial_pass is TrialPass.WITHOUT_PATCH,
        )
        if trial_pass is TrialPass.WITH_PATCH and patch > 0:
            state = (TrialPass.WITH_PATCH, patch - 1)
        elif trial_pass is TrialPass.WITH_PATCH:
            state = (TrialPass.WITHOUT_PATCH, 0)
        else:
            state = None


def best_match(
    contextualized: ContextualizedDependency, versions: list[str]
) -> MatchResult | None:
    """Pick the highest-ranked matching version (later wins ties)."""
    dependency = contextualized.parent
    best: MatchResult | None = None
    best_rank: DependencyVersion | None = None
    for version in versions:
        match = contextualized.match(version)
        if match is None:
            continue
        rank = dependency.captures_to_version(match.captures)
        if best_rank is None or rank >= best_rank:
            best, best_rank = match, rank
    return best


def resolve_dependency(
    dependency: Dependency,
    target: PlatformVersion,
    source: ListingSource,
    *,
    delay: float = DEFAULT_TRIAL_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    logger: Logger | None = None,
) -> Resolution:
    """Run the trial loop for one dependency.

    Args:
        dependency: The declaration to resolve.
        target: Target platform version.
        source: Where version listings come from.
        delay: Seconds to wait before each query after the first. 0
            disables waiting.
        sleep: Sleep function, injectable for tests.
        logger: Logger instance; defaults to the global logger.

    Returns:
        The winning version, its artifact id and the trial context.

    Raises:
        NoMatchFound: If no trial produced a matching version.

    """
    logger = logger if logger is not None else get_global_logger()

    queried = False
    previous_artifact_id: str | None = None
    previous_listing: list[str] | None = None
    previous_error: ListingQueryFailed | None = None

    for context in trial_contexts(target):
        contextualized = dependency.contextualize(context)
        artifact_id = contextualized.artifact_id
        trial = (
            f"{dependency.group_id}:{artifact_id} "
            f"(mcVersion {expand_contextual('mcVersion', context)})"
        )

        if artifact_id != previous_artifact_id:
            if queried and delay > 0:
                sleep(delay)
            queried = True
            previous_artifact_id = artifact_id
            try:
                previous_listing = source.fetch_listing(
                    dependency.repository, dependency.group_id, artifact_id
                )
                previous_error = None
            except ListingQueryFailed as err:
                previous_listing, previous_error = None, err
        else:
            logger.debug("RESOLVE", f"Reusing listing of {artifact_id} for {trial}")

        if previous_error is not None:
            logger.debug(
                "RESOLVE",
                f"Trial failed for {trial} in {dependency.repository}: {previous_error}",
            )
            continue

        match = best_match(contextualized, previous_listing or [])
        if match is None:
            logger.debug("RESOLVE", f"No matching version for {trial}")
            continue

        logger.verbose(
            "RESOLVE",
            f"Best matching version is {match.version} for "
            f"{dependency.group_id}:{artifact_id} in {dependency.repository}",
        )
        return Resolution(
            dependency=dependency,
            artifact_id=artifact_id,
            match=match,
            context=context,
        )

    raise NoMatchFound(
        f"No matching version found for {dependency.coordinates} "
        f"in {dependency.repository}"
    )
