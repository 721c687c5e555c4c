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

"""Version comparison utilities for moddeps.

This package provides the two version types moddeps works with:

Modules:
    keys
        Tokenization and total ordering of dependency version strings
        (Gradle-style, with special qualifiers dev < rc < snapshot < final
        < ga < release < sp).
    platform
        The ``major.minor.patch`` platform (Minecraft) version value type.

Example:
    Basic version comparison:
        ```python
        from moddeps.versioning import compare_versions

        compare_versions("1.2.1", "1.2.0")      # Returns: 1
        compare_versions("2.1.2", "2-1-2")      # Returns: 0
        compare_versions("1.1.1", "1.1.1.a")    # Returns: 1
        ```

    Platform versions:
        ```python
        from moddeps.versioning import PlatformVersion

        v = PlatformVersion.parse("1.20")
        v.format()           # "1.20"
        v.format(full=True)  # "1.20.0"
        ```

Note:
    Version comparison is format-agnostic: no network or file I/O.
"""

from .keys import (
    SPECIAL_QUALIFIERS,
    DependencyVersion,
    Token,
    compare_tokens,
    compare_versions,
    version_tokens,
)
from .platform import PlatformVersion

__all__ = [
    "SPECIAL_QUALIFIERS",
    "DependencyVersion",
    "PlatformVersion",
    "Token",
    "compare_tokens",
    "compare_versions",
    "version_tokens",
]
