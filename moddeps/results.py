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

"""Public API return types for moddeps.

This module defines dataclasses for return values from public API functions.
All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from pathlib import Path
        from moddeps.core import update_properties

        result = update_properties(
            Path("modding-dependencies.yml"), Path("gradle.properties")
        )
        print(f"{result.updated_count}/{result.total_count} updated")
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like MatchResult) remain co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from moddeps.dependency import Dependency, MatchResult
from moddeps.pattern import ResolutionContext
from moddeps.versioning import PlatformVersion


@dataclass(frozen=True)
class Resolution:
    """Winner of a resolution loop.

    Attributes:
        dependency: The resolved declaration.
        artifact_id: Artifact id the winning version was listed under.
        match: The winning version and its captures.
        context: Context of the trial that produced the winner.
    """

    dependency: Dependency
    artifact_id: str
    match: MatchResult
    context: ResolutionContext

    @property
    def version(self) -> str:
        return self.match.version


@dataclass(frozen=True)
class PropertyChange:
    """One materialized property merged into the properties file.

    Attributes:
        name: Property key.
        old_value: Value before the run (None if the key was absent).
        new_value: Resolved value.
    """

    name: str
    old_value: str | None
    new_value: str

    @property
    def changed(self) -> bool:
        return self.old_value != self.new_value


@dataclass(frozen=True)
class SkippedDependency:
    """A dependency whose resolution failed and was tolerated.

    Attributes:
        index: Position of the declaration in the config file.
        coordinates: ``groupId:artifactId`` pattern, for display.
        error: Error message.
    """

    index: int
    coordinates: str
    error: str


@dataclass(frozen=True)
class UpdateResult:
    """Result from an update run.

    Attributes:
        platform_before: Platform version read from the properties file.
        platform_after: Platform version after the run.
        changes: Every materialized property, in declaration order.
        skipped: Dependencies skipped because of tolerated errors.
        dependencies_resolved: False when resolution was not attempted
            (update_only_with_platform without a platform change).
        written: True if the properties file was saved.
    """

    platform_before: PlatformVersion
    platform_after: PlatformVersion
    changes: list[PropertyChange] = field(default_factory=list)
    skipped: list[SkippedDependency] = field(default_factory=list)
    dependencies_resolved: bool = True
    written: bool = False

    @property
    def platform_changed(self) -> bool:
        return self.platform_after > self.platform_before

    @property
    def updated_count(self) -> int:
        return sum(1 for change in self.changes if change.changed)

    @property
    def total_count(self) -> int:
        return len(self.changes)

    @property
    def any_update(self) -> bool:
        return self.platform_changed or self.updated_count > 0


@dataclass(frozen=True)
class ResolveResult:
    """Result from resolving declarations without touching any file.

    Attributes:
        platform_version: Platform version resolved against.
        resolutions: Winning trial of every resolved dependency.
        properties: Materialized properties of every resolved dependency,
            in declaration order (later declarations win on name clashes).
        skipped: Dependencies skipped because of tolerated errors.
    """

    platform_version: PlatformVersion
    resolutions: list[Resolution] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    skipped: list[SkippedDependency] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a declarations file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        dependency_count: Number of declarations in the file.
        config_path: String path to the validated file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    dependency_count: int
    config_path: str
