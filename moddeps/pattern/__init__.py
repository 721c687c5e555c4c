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

"""Artifact/version pattern language for moddeps.

Modules:
    segments
        Segment types and the pattern compiler.
    context
        ResolutionContext and the closed table of contextual wildcards.
    render
        Concrete strings and anchored match expressions for one context.

Example:
    ```python
    from moddeps.pattern import ResolutionContext, compile_pattern, match_expression
    from moddeps.versioning import PlatformVersion

    segments = compile_pattern("*+${mcVersion}")
    ctx = ResolutionContext(PlatformVersion(1, 20, 1))
    match_expression(segments, ctx)  # '^(.*)\\+1\\.20\\.1$'
    ```
"""

from .context import (
    CONTEXTUAL_WILDCARDS,
    ResolutionContext,
    expand_contextual,
    is_contextual_name,
)
from .render import compile_matcher, concrete_string, match_expression, render_segment
from .segments import (
    ContextualWildcard,
    LiteralSegment,
    NamedWildcard,
    PatternSegment,
    Wildcard,
    capturing_segments,
    check_artifact_id_pattern,
    compile_pattern,
    named_wildcards,
)

__all__ = [
    "CONTEXTUAL_WILDCARDS",
    "ContextualWildcard",
    "LiteralSegment",
    "NamedWildcard",
    "PatternSegment",
    "ResolutionContext",
    "Wildcard",
    "capturing_segments",
    "check_artifact_id_pattern",
    "compile_matcher",
    "compile_pattern",
    "concrete_string",
    "expand_contextual",
    "is_contextual_name",
    "match_expression",
    "named_wildcards",
    "render_segment",
]
