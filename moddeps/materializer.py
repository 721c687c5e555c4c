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

"""Turn a Resolution into property values.

Each declared property takes its value from one source:

- ``version``: the full matched version string
- ``artifactId``: the artifact id of the winning trial
- ``wildcard``: a contextual wildcard evaluated under the winning context,
  or the text captured by the first named wildcard with that name
"""

from __future__ import annotations

from moddeps.dependency import Dependency, PropertySource
from moddeps.exceptions import UnresolvedProperty
from moddeps.pattern import NamedWildcard, expand_contextual, is_contextual_name
from moddeps.results import Resolution


def _wildcard_value(dependency: Dependency, resolution: Resolution, name: str) -> str:
    if is_contextual_name(name):
        return expand_contextual(name, resolution.context)

    captures = iter(resolution.match.captures)
    for segment in dependency.version:
        if not segment.captures:
            continue
        captured = next(captures)
        if isinstance(segment, NamedWildcard) and segment.name == name:
            return captured
    raise UnresolvedProperty(
        f"Wildcard {name!r} is neither contextual nor captured by "
        f"{dependency.coordinates}"
    )


def materialize_property(
    dependency: Dependency, resolution: Resolution, source: PropertySource
) -> str:
    if source.kind == "version":
        return resolution.match.version
    if source.kind == "artifactId":
        return resolution.artifact_id
    return _wildcard_value(dependency, resolution, source.wildcard_name or "")


def materialize_properties(
    dependency: Dependency, resolution: Resolution
) -> dict[str, str]:
    """Compute every declared property of ``dependency``.

    Args:
        dependency: The resolved declaration.
        resolution: Its winning trial.

    Returns:
        Property name to value, in declaration order.

    Raises:
        UnresolvedProperty: If a wildcard name cannot be resolved. The loader
            rejects such declarations, so this only happens for
            hand-built Dependency objects.

    Example:
        ```python
        # version: "${fabric}+${mcVersion}", resolved to "0.91.0+1.20.1"
        materialize_properties(dep, resolution)
        # {"fabric_version": "0.91.0+1.20.1", "fabric": "0.91.0"}
        ```
    """
    return {
        name: materialize_property(dependency, resolution, source)
        for name, source in dependency.properties.items()
    }
