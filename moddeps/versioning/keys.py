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

"""Core version comparison utilities for moddeps.

This module is format-agnostic: it does NOT download or read files.
It only tokenizes and compares dependency version strings, following the
Gradle version ordering rules
(https://docs.gradle.org/current/userguide/single_versions.html#version_ordering).

Tokenization:
    Maximal runs of digits become ints, maximal runs of ASCII letters become
    strings, everything else is a separator and is dropped. "2.1.2" and
    "2-1-2" therefore produce the same tokens.

Ordering (position by position, first difference wins):

- int vs int: numeric order
- int vs str or missing: the int is greater
- str vs missing: the str is smaller ("1.0-alpha" < "1.0")
- str vs str: special qualifiers first, then code-point order
- both exhausted: equal
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
import re
from typing import Union

Token = Union[int, str]

_VERSION_PART = re.compile(r"([0-9]+)|([A-Za-z]+)")

# Order matters; "dev" must stay at index 0, it sorts below every other
# non-numeric token.
SPECIAL_QUALIFIERS: tuple[str, ...] = (
    "dev",
    "rc",
    "snapshot",
    "final",
    "ga",
    "release",
    "sp",
)
_SPECIAL_RANK = {name: rank for rank, name in enumerate(SPECIAL_QUALIFIERS)}
_DEV_RANK = 0


def version_tokens(text: str) -> tuple[Token, ...]:
    """Split a version string into numeric and alphabetic tokens.

    Example:
        ```python
        version_tokens("1.2.1-mc1.7.10-alpha+build.1123")
        # (1, 2, 1, "mc", 1, 7, 10, "alpha", "build", 1123)
        ```
    """
    tokens: list[Token] = []
    for m in _VERSION_PART.finditer(text.strip()):
        if m.group(1) is not None:
            tokens.append(int(m.group(1)))
        else:
            tokens.append(m.group(2))
    return tuple(tokens)


def _compare_words(x: str, y: str) -> int:
    """Compare two alphabetic tokens."""
    ix = _SPECIAL_RANK.get(x.lower())
    iy = _SPECIAL_RANK.get(y.lower())
    if ix is not None and iy is not None:
        return ix - iy
    if ix is not None:
        return -1 if ix == _DEV_RANK else 1
    if iy is not None:
        return 1 if iy == _DEV_RANK else -1
    # Neither is special: case-sensitive, shorter-is-less on common prefix
    return (x > y) - (x < y)


def compare_token(x: Token | None, y: Token | None) -> int:
    """Compare one position of two token sequences (``None`` = missing)."""
    x_num = isinstance(x, int)
    y_num = isinstance(y, int)
    if x_num and y_num:
        return x - y  # type: ignore[operator]
    if x_num:
        return 1
    if y_num:
        return -1
    if x is not None and y is not None:
        return _compare_words(x, y)  # type: ignore[arg-type]
    if x is not None:
        return -1
    if y is not None:
        return 1
    return 0


def compare_tokens(a: tuple[Token, ...], b: tuple[Token, ...]) -> int:
    """Compare two token sequences.

    Returns:
        A negative number if a < b, zero if equal, a positive number if a > b.
    """
    for i in range(max(len(a), len(b))):
        x = a[i] if i < len(a) else None
        y = b[i] if i < len(b) else None
        cmp = compare_token(x, y)
        if cmp != 0:
            return cmp
    return 0


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings, returning -1, 0 or 1."""
    cmp = compare_tokens(version_tokens(a), version_tokens(b))
    return (cmp > 0) - (cmp < 0)


@total_ordering
@dataclass(frozen=True, eq=False)
class DependencyVersion:
    """A tokenized dependency version.

    Equality and ordering follow compare_tokens(), so two versions that only
    differ by separators compare equal.

    Attributes:
        raw: The string the tokens were built from.
        tokens: Tokenized form of ``raw``.
    """

    raw: str
    tokens: tuple[Token, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", version_tokens(self.raw))

    def compare(self, other: DependencyVersion) -> int:
        return compare_tokens(self.tokens, other.tokens)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: DependencyVersion) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        # Special qualifiers compare case-insensitively
        return hash(
            tuple(
                t.lower() if isinstance(t, str) and t.lower() in _SPECIAL_RANK else t
                for t in self.tokens
            )
        )
