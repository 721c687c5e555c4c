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

"""Listing source protocol for moddeps.

The resolution loop never talks to a repository directly. It asks a
ListingSource for the published versions of one concrete artifact, which
keeps the loop testable with an in-memory fake.

Protocol Benefits:

Using typing.Protocol instead of ABC allows:

- Duck typing: Classes don't need explicit inheritance
- Test doubles: A dict-backed fake satisfies the interface as-is

Example:
    Implementing a custom source:
        ```python
        class StaticListingSource:
            def __init__(self, listings: dict[str, list[str]]):
                self.listings = listings

            def fetch_listing(
                self, repository: str, group_id: str, artifact_id: str
            ) -> list[str]:
                try:
                    return self.listings[artifact_id]
                except KeyError as err:
                    raise ListingQueryFailed(f"No listing for {artifact_id}") from err
        ```
"""

from __future__ import annotations

from typing import Protocol


class ListingSource(Protocol):
    """Protocol for artifact version listings."""

    def fetch_listing(
        self, repository: str, group_id: str, artifact_id: str
    ) -> list[str]:
        """Return every published version of one artifact.

        Args:
            repository: Repository base URL.
            group_id: Maven group id (dotted form).
            artifact_id: Concrete artifact id.

        Returns:
            Version strings in listing order.

        Raises:
            ListingQueryFailed: If the listing cannot be obtained or parsed.

        """
        ...
