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

"""Exception hierarchy for moddeps.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors. All exceptions inherit from
ModdepsError, allowing users to catch all moddeps errors with a single except
clause if needed.

Hierarchy:

- ModdepsError
    - ConfigError
        - PatternSyntaxError
        - InvalidPatternUse
        - UnresolvedProperty
    - NetworkError
        - ListingQueryFailed
    - ResolutionError
        - NoMatchFound

Example:
    Catching specific error types:
        ```python
        from moddeps.core import update_properties
        from moddeps.exceptions import ConfigError, NoMatchFound

        try:
            result = update_properties(Path("modding-dependencies.yml"),
                                       Path("gradle.properties"))
        except ConfigError as e:
            print(f"Configuration error: {e}")
        except NoMatchFound as e:
            print(f"Nothing matched: {e}")
        ```

    Catching all moddeps errors:
        ```python
        from moddeps.exceptions import ModdepsError

        try:
            result = update_properties(config_path, properties_path)
        except ModdepsError as e:
            print(f"moddeps error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "ModdepsError",
    "ConfigError",
    "PatternSyntaxError",
    "InvalidPatternUse",
    "UnresolvedProperty",
    "NetworkError",
    "ListingQueryFailed",
    "ResolutionError",
    "NoMatchFound",
]


class ModdepsError(Exception):
    """Base exception for all moddeps errors.

    All moddeps-specific exceptions inherit from this class, allowing users
    to catch all moddeps errors with a single except clause if needed.
    """

    pass


class ConfigError(ModdepsError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure, empty files)
    - Missing or wrongly typed declaration fields
    - Unknown property sources
    - The properties file (missing minecraft_version key)
    - Invalid environment settings

    All declaration errors are raised at load time, before any network
    activity, so a partially resolved run never starts.
    """

    pass


class PatternSyntaxError(ConfigError):
    """Raised when a pattern opens a ``${`` substitution that is never closed."""

    pass


class InvalidPatternUse(ConfigError):
    """Raised when a capturing wildcard appears where it cannot be resolved.

    Artifact ids must be computable before the answer is known, so an
    artifactId pattern may only contain literals and contextual wildcards.
    """

    pass


class UnresolvedProperty(ConfigError):
    """Raised when a wildcard property names neither a contextual wildcard
    nor a named wildcard of the version pattern."""

    pass


class NetworkError(ModdepsError):
    """Raised for network-related errors.

    This exception is raised when there are problems with:

    - HTTP failures (non-2xx status codes, connection timeouts)
    - Unexpected response structure (invalid JSON or XML, missing fields)
    """

    pass


class ListingQueryFailed(NetworkError):
    """Raised when one repository listing query fails.

    The resolution loop records this error and moves on to the next trial;
    it is never fatal on its own.
    """

    pass


class ResolutionError(ModdepsError):
    """Raised when a dependency cannot be resolved."""

    pass


class NoMatchFound(ResolutionError):
    """Raised when every trial produced zero matching versions.

    Fatal for the affected dependency only; whether it aborts the whole run
    is decided by the caller (see the ``tolerable`` setting).
    """

    pass
