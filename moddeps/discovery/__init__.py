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

"""Remote lookups for moddeps.

Available Sources:
    MavenListingSource : ListingSource
        Versions of one artifact from ``maven-metadata.xml``.
    fetch_platform_patches
        Latest released Minecraft patch per minor version, from Mojang's
        version manifest.

Example:
    ```python
    from moddeps.discovery import MavenListingSource

    source = MavenListingSource(timeout=10)
    source.fetch_listing("https://maven.terraformersmc.com", "com.terraformersmc", "modmenu")
    ```
"""

from .base import ListingSource
from .maven import MavenListingSource, metadata_url, parse_metadata
from .platform import VERSION_MANIFEST_URL, fetch_platform_patches, latest_patches

__all__ = [
    "ListingSource",
    "MavenListingSource",
    "VERSION_MANIFEST_URL",
    "fetch_platform_patches",
    "latest_patches",
    "metadata_url",
    "parse_metadata",
]
