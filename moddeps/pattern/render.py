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

"""Contextualization of compiled patterns.

Turns a segment sequence plus a ResolutionContext into either a concrete
string (artifact ids) or an anchored regular expression (versions). Only
literal and contextual segments are escaped; capturing segments become
``(.*)`` groups.
"""

from __future__ import annotations

import re

from moddeps.exceptions import InvalidPatternUse

from .context import ResolutionContext, expand_contextual
from .segments import (
    ContextualWildcard,
    LiteralSegment,
    NamedWildcard,
    PatternSegment,
    Wildcard,
)

CAPTURE_GROUP = "(.*)"


def render_segment(segment: PatternSegment, context: ResolutionContext) -> str:
    """Render one segment as a piece of a match expression."""
    if isinstance(segment, LiteralSegment):
        return re.escape(segment.text)
    if isinstance(segment, ContextualWildcard):
        return re.escape(expand_contextual(segment.name, context))
    if isinstance(segment, (NamedWildcard, Wildcard)):
        return CAPTURE_GROUP
    raise TypeError(f"Unknown pattern segment: {segment!r}")


def concrete_string(
    segments: tuple[PatternSegment, ...], context: ResolutionContext
) -> str:
    """Resolve every segment to text.

    Raises:
        InvalidPatternUse: If a capturing segment is present; those have no
            text until something is matched against them.
    """
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, LiteralSegment):
            parts.append(segment.text)
        elif isinstance(segment, ContextualWildcard):
            parts.append(expand_contextual(segment.name, context))
        else:
            raise InvalidPatternUse(
                f"Cannot build a concrete string from capturing segment {segment!r}"
            )
    return "".join(parts)


def match_expression(
    segments: tuple[PatternSegment, ...], context: ResolutionContext
) -> str:
    """Build the anchored match expression for ``segments``."""
    return "^" + "".join(render_segment(s, context) for s in segments) + r"\Z"


def compile_matcher(
    segments: tuple[PatternSegment, ...], context: ResolutionContext
) -> re.Pattern[str]:
    return re.compile(match_expression(segments, context))
