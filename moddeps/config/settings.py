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

"""Run settings for moddeps.

Settings come from three layers, last wins:

1. Built-in defaults (the RunSettings field defaults)
2. ``MODDEPS_*`` environment variables, optionally from a ``.env`` file in
   the working directory (or one of its parents)
3. Explicit overrides (CLI flags); ``None`` means "not given"

Environment Variables:
    MODDEPS_UPDATE_PLATFORM_PATCH : bool
        Move minecraft_version to the latest patch of its minor version.
    MODDEPS_UPDATE_ONLY_WITH_PLATFORM : bool
        Only resolve dependencies when minecraft_version changed.
    MODDEPS_TOLERABLE : bool
        Skip dependencies that fail to resolve instead of aborting.
    MODDEPS_TRIAL_DELAY : float
        Seconds between repository queries of one dependency.
    MODDEPS_MAX_WORKERS : int
        Dependencies resolved in parallel.
    MODDEPS_DRY_RUN : bool
        Resolve and report without writing the properties file.

Booleans accept true/false, yes/no, on/off and 1/0 (any case). Empty values
are treated as unset.

Example:
    ```python
    from moddeps.config import load_settings

    settings = load_settings(tolerable=True)
    settings.trial_delay  # 1.0 unless MODDEPS_TRIAL_DELAY is set
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import os
from typing import Any

from dotenv import find_dotenv, load_dotenv

from moddeps.exceptions import ConfigError

ENV_PREFIX = "MODDEPS_"

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


@dataclass(frozen=True)
class RunSettings:
    """Options of one update run.

    Attributes:
        update_platform_patch: Bump minecraft_version to the latest released
            patch of its minor version before resolving.
        update_only_with_platform: Skip dependency resolution unless the
            platform version changed.
        tolerable: Log and skip dependencies that fail to resolve.
        trial_delay: Seconds slept before each query after the first, per
            dependency.
        max_workers: Upper bound of dependencies resolved concurrently.
        dry_run: Do not write the properties file.
    """

    update_platform_patch: bool = False
    update_only_with_platform: bool = False
    tolerable: bool = False
    trial_delay: float = 1.0
    max_workers: int = 8
    dry_run: bool = False


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean (true/false), got {raw!r}")


def _parse_value(key: str, kind: Any, raw: str) -> Any:
    if kind in (bool, "bool"):
        return _parse_bool(key, raw)
    try:
        if kind in (int, "int"):
            return int(raw.strip())
        return float(raw.strip())
    except ValueError as err:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from err


def _check(settings: RunSettings) -> RunSettings:
    if settings.trial_delay < 0:
        raise ConfigError(f"trial_delay cannot be negative: {settings.trial_delay}")
    if settings.max_workers < 1:
        raise ConfigError(f"max_workers must be at least 1: {settings.max_workers}")
    return settings


def settings_from_env(environ: dict[str, str] | None = None) -> RunSettings:
    """Build RunSettings from ``MODDEPS_*`` variables only.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    environ = dict(os.environ) if environ is None else environ
    values: dict[str, Any] = {}
    for f in fields(RunSettings):
        key = ENV_PREFIX + f.name.upper()
        raw = environ.get(key)
        if raw is None or not raw.strip():
            continue
        values[f.name] = _parse_value(key, f.type, raw)
    return _check(RunSettings(**values))


def load_settings(**overrides: Any) -> RunSettings:
    """Load run settings from the environment (and ``.env``), then apply
    overrides.

    Args:
        **overrides: RunSettings fields; ``None`` values are ignored.

    Returns:
        The effective settings.

    Raises:
        ConfigError: On invalid environment values, unknown override names,
            or out-of-range values.
    """
    load_dotenv(find_dotenv(usecwd=True))
    settings = settings_from_env()

    known = {f.name for f in fields(RunSettings)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

    given = {k: v for k, v in overrides.items() if v is not None}
    return _check(replace(settings, **given))
