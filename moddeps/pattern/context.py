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

"""Resolution context and the contextual wildcard table.

A contextual wildcard is a ``${name}`` placeholder whose value comes from the
platform version being tried, never from repository data. The set of names
is closed:

| Name            | Value for 1.20.1 | Value for 1.20.0 (patch omitted) |
|-----------------|------------------|----------------------------------|
| mcVersion       | 1.20.1           | 1.20                             |
| mcVersionFull   | 1.20.1           | 1.20.0                           |
| mcMajor         | 1                | 1                                |
| mcMinor         | 20               | 20                               |
| mcPatch         | 1                | 0                                |
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from moddeps.versioning.platform import PlatformVersion


@dataclass(frozen=True)
class ResolutionContext:
    """The hypothesis tested by one trial.

    Attributes:
        platform_version: Platform version being tried.
        omit_patch: If True, ``mcVersion`` drops a zero patch ("1.20"
            instead of "1.20.0"). Used to probe releases published without
            a specific patch.
    """

    platform_version: PlatformVersion
    omit_patch: bool = False


CONTEXTUAL_WILDCARDS: dict[str, Callable[[ResolutionContext], str]] = {
    "mcVersion": lambda ctx: ctx.platform_version.format(full=not ctx.omit_patch),
    "mcVersionFull": lambda ctx: ctx.platform_version.format(full=True),
    "mcMajor": lambda ctx: str(ctx.platform_version.major),
    "mcMinor": lambda ctx: str(ctx.platform_version.minor),
    "mcPatch": lambda ctx: str(ctx.platform_version.patch),
}


def is_contextual_name(name: str) -> bool:
    return name in CONTEXTUAL_WILDCARDS


def expand_contextual(name: str, context: ResolutionContext) -> str:
    """Evaluate a contextual wildcard under ``context``.

    Raises:
        KeyError: If ``name`` is not a contextual wildcard.
    """
    return CONTEXTUAL_WILDCARDS[name](context)
