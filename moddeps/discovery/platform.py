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

"""Platform (Minecraft) release catalog.

Reads Mojang's version manifest and reduces it to the latest released patch
of every minor version. Snapshots, pre-releases and release candidates are
ignored (only entries with ``type == "release"`` count).

Example:
    ```python
    from moddeps.discovery import fetch_platform_patches

    patches = fetch_platform_patches()
    patches[20]  # e.g. 6 for 1.20.6
    ```
"""

from __future__ import annotations

import json
from typing import Any

import requests

from moddeps.exceptions import NetworkError
from moddeps.logging import Logger, get_global_logger
from moddeps.versioning import PlatformVersion

VERSION_MANIFEST_URL = (
    "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
)


def latest_patches(manifest: dict[str, Any]) -> dict[int, int]:
    """Reduce a version manifest to ``{minor: highest release patch}``.

    Raises:
        NetworkError: If the manifest does not have the expected structure.
    """
    entries = manifest.get("versions") if isinstance(manifest, dict) else None
    if not isinstance(entries, list):
        raise NetworkError("Version manifest has no 'versions' list")

    patches: dict[int, int] = {}
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("type") != "release":
            continue
        version_id = entry.get("id")
        if not isinstance(version_id, str):
            raise NetworkError(f"Release entry without a string id: {entry!r}")
        version = PlatformVersion.parse(version_id)
        if version.patch >= patches.get(version.minor, 0):
            patches[version.minor] = version.patch
    return patches


def fetch_platform_patches(
    url: str = VERSION_MANIFEST_URL,
    timeout: float = 30,
    logger: Logger | None = None,
) -> dict[int, int]:
    """Fetch the release catalog and return the latest patch per minor.

    Args:
        url: Version manifest URL.
        timeout: Request timeout in seconds.
        logger: Logger instance; defaults to the global logger.

    Returns:
        Mapping of minor version to its highest released patch.

    Raises:
        NetworkError: On HTTP, JSON or structure errors (chained with
            'from err').
    """
    logger = logger if logger is not None else get_global_logger()
    logger.verbose("PLATFORM", f"Fetching version manifest: {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise NetworkError(
            f"Version manifest request failed: {response.status_code} "
            f"{response.reason}"
        ) from err
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"Failed to fetch version manifest: {err}") from err

    try:
        manifest = response.json()
    except json.JSONDecodeError as err:
        raise NetworkError(
            f"Invalid JSON in version manifest. Response: {response.text[:200]}"
        ) from err

    patches = latest_patches(manifest)
    logger.debug("PLATFORM", f"Latest patches by minor: {patches}")
    return patches
