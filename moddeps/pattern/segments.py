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

"""Pattern segments and the pattern compiler.

Pattern syntax:

- ``*``: anonymous wildcard, captures anything
- ``${name}``: contextual wildcard when ``name`` is in the contextual table
  (mcVersion, mcVersionFull, mcMajor, mcMinor, mcPatch), otherwise a named
  wildcard that captures anything and can be referenced by properties
- anything else: literal text (a ``$`` followed by anything but ``{`` included)

Example:
    ```python
    compile_pattern("${fabric_version}+${mcVersion}")
    # (NamedWildcard("fabric_version"), LiteralSegment("+"),
    #  ContextualWildcard("mcVersion"))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from moddeps.exceptions import InvalidPatternUse, PatternSyntaxError

from .context import is_contextual_name


@dataclass(frozen=True)
class LiteralSegment:
    """Plain text that must appear verbatim."""

    text: str
    captures: ClassVar[bool] = False


@dataclass(frozen=True)
class ContextualWildcard:
    """``${name}`` replaced by a value derived from the resolution context."""

    name: str
    captures: ClassVar[bool] = False


@dataclass(frozen=True)
class NamedWildcard:
    """``${name}`` capturing anything; referenced by wildcard properties."""

    name: str
    captures: ClassVar[bool] = True


@dataclass(frozen=True)
class Wildcard:
    """``*`` capturing anything."""

    captures: ClassVar[bool] = True


PatternSegment = Union[LiteralSegment, ContextualWildcard, NamedWildcard, Wildcard]


def _substitution(name: str) -> PatternSegment:
    if is_contextual_name(name):
        return ContextualWildcard(name)
    return NamedWildcard(name)


def compile_pattern(pattern: str) -> tuple[PatternSegment, ...]:
    """Compile a pattern string into segments.

    Args:
        pattern: Pattern text, e.g. ``"malilib-fabric-${mcVersion}"``.

    Returns:
        The segments in pattern order. An empty pattern gives an empty tuple.

    Raises:
        PatternSyntaxError: If a ``${`` is never closed by ``}``, or the
            pattern ends with a lone ``$``.
    """
    segments: list[PatternSegment] = []
    start = 0  # start of the pending literal run
    i = 0
    while i < len(pattern):
        special: PatternSegment | None = None
        end = i
        if pattern[i] == "*":
            special = Wildcard()
            i += 1
        elif pattern[i] == "$" and i + 1 == len(pattern):
            raise PatternSyntaxError(
                f"Dangling '$' at the end of pattern {pattern!r}"
            )
        elif pattern.startswith("${", i):
            right = pattern.find("}", i + 2)
            if right == -1:
                raise PatternSyntaxError(
                    f"Unclosed '${{' at position {i} in pattern {pattern!r}"
                )
            special = _substitution(pattern[i + 2 : right])
            i = right + 1
        else:
            i += 1

        if special is not None:
            if end > start:
                segments.append(LiteralSegment(pattern[start:end]))
            segments.append(special)
            start = i

    if start < len(pattern):
        segments.append(LiteralSegment(pattern[start:]))
    return tuple(segments)


def capturing_segments(
    segments: tuple[PatternSegment, ...],
) -> tuple[NamedWildcard | Wildcard, ...]:
    return tuple(s for s in segments if s.captures)  # type: ignore[misc]


def named_wildcards(segments: tuple[PatternSegment, ...]) -> list[str]:
    """Names of the named wildcards, in pattern order (duplicates kept)."""
    return [s.name for s in segments if isinstance(s, NamedWildcard)]


def check_artifact_id_pattern(segments: tuple[PatternSegment, ...]) -> None:
    """Reject capturing wildcards in an artifactId pattern.

    Raises:
        InvalidPatternUse: If a ``*`` or a non-contextual ``${name}`` is
            present.
    """
    for segment in segments:
        if isinstance(segment, Wildcard):
            raise InvalidPatternUse(
                "artifactId can only contain literals and contextual wildcards, "
                "found '*'"
            )
        if isinstance(segment, NamedWildcard):
            raise InvalidPatternUse(
                "artifactId can only contain literals and contextual wildcards, "
                f"found '${{{segment.name}}}'"
            )
