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

"""Platform (Minecraft) version value type."""

from __future__ import annotations

from dataclasses import dataclass
import re

_LEADING_INT = re.compile(r"\s*(\d+)")


def _component(parts: list[str], index: int) -> int:
    """Parse the leading integer of a dotted component, 0 when absent."""
    if index >= len(parts):
        return 0
    m = _LEADING_INT.match(parts[index])
    return int(m.group(1)) if m else 0


@dataclass(frozen=True, order=True)
class PlatformVersion:
    """A ``major.minor.patch`` platform version.

    Ordering is component-wise (the dataclass is declared with ``order=True``
    and the fields are listed in significance order).

    Attributes:
        major: Major component (``1`` in ``1.20.1``).
        minor: Minor component (``20`` in ``1.20.1``).
        patch: Patch component (``1`` in ``1.20.1``, ``0`` for ``1.20``).
    """

    major: int
    minor: int
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> PlatformVersion:
        """Parse ``"1.20.1"``; missing or non-numeric components become 0.

        Example:
            ```python
            PlatformVersion.parse("1.20")    # PlatformVersion(1, 20, 0)
            PlatformVersion.parse("1.20.4")  # PlatformVersion(1, 20, 4)
            ```
        """
        parts = text.strip().split(".")
        return cls(_component(parts, 0), _component(parts, 1), _component(parts, 2))

    def with_patch(self, patch: int) -> PlatformVersion:
        return PlatformVersion(self.major, self.minor, patch)

    def format(self, full: bool = False) -> str:
        """Render the version, dropping a zero patch unless ``full`` is set."""
        text = f"{self.major}.{self.minor}"
        if self.patch > 0 or full:
            text += f".{self.patch}"
        return text

    def __str__(self) -> str:
        return self.format()
