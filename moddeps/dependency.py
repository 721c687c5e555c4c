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

"""Dependency declarations and their per-trial contextualization.

A Dependency is built once by the config loader and never mutated. For each
trial the resolver asks it for a ContextualizedDependency (concrete artifact
id plus compiled version matcher) and turns matched captures into a
DependencyVersion for ranking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Literal

from moddeps.pattern import (
    PatternSegment,
    ResolutionContext,
    capturing_segments,
    compile_matcher,
    concrete_string,
)
from moddeps.versioning import DependencyVersion

PropertyKind = Literal["version", "artifactId", "wildcard"]
PROPERTY_KINDS: tuple[PropertyKind, ...] = ("version", "artifactId", "wildcard")


@dataclass(frozen=True)
class PropertySource:
    """Where a declared property takes its value from.

    Attributes:
        kind: "version" (matched version string), "artifactId" (resolved
            artifact id) or "wildcard" (a contextual or named wildcard).
        wildcard_name: Wildcard referenced by a "wildcard" source; None for
            the other kinds.
    """

    kind: PropertyKind
    wildcard_name: str | None = None


@dataclass(frozen=True)
class MatchResult:
    """A listed version that matched the version expression.

    Attributes:
        version: The raw version string from the listing.
        captures: Text captured by each capturing segment, in pattern order.
    """

    version: str
    captures: tuple[str, ...]


@dataclass(frozen=True)
class ContextualizedDependency:
    """A Dependency bound to one ResolutionContext."""

    parent: Dependency
    context: ResolutionContext
    artifact_id: str
    matcher: re.Pattern[str]

    def match(self, version: str) -> MatchResult | None:
        m = self.matcher.match(version)
        if m is None:
            return None
        return MatchResult(version=version, captures=m.groups())


@dataclass(frozen=True)
class Dependency:
    """A validated dependency declaration.

    Attributes:
        repository: Maven repository base URL.
        group_id: Maven group id.
        artifact_id: Compiled artifactId pattern (literals and contextual
            wildcards only).
        version: Compiled version pattern.
        properties: Property name to source, in declaration order.
        artifact_id_pattern: The artifactId pattern text, for messages.
    """

    repository: str
    group_id: str
    artifact_id: tuple[PatternSegment, ...]
    version: tuple[PatternSegment, ...]
    properties: dict[str, PropertySource] = field(default_factory=dict)
    artifact_id_pattern: str = ""

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id_pattern}"

    def contextualize(self, context: ResolutionContext) -> ContextualizedDependency:
        return ContextualizedDependency(
            parent=self,
            context=context,
            artifact_id=concrete_string(self.artifact_id, context),
            matcher=compile_matcher(self.version, context),
        )

    def captures_to_version(self, captures: tuple[str, ...]) -> DependencyVersion:
        """Build the ranking version from the captured texts.

        Only capturing segments take part in ranking; each capture is
        appended with a "-" separator before tokenizing.

        Raises:
            ValueError: If the number of captures does not match the number
                of capturing segments.
        """
        expected = len(capturing_segments(self.version))
        if len(captures) != expected:
            raise ValueError(
                f"Unmatched number of captures: got {len(captures)}, "
                f"expected {expected}"
            )
        return DependencyVersion("".join(f"-{capture}" for capture in captures))
