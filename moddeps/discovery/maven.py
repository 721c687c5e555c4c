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

"""Maven repository listing source for moddeps.

Reads the artifact-level ``maven-metadata.xml`` of a Maven repository and
returns the versions it lists. One call is one HTTP GET; there is no caching
between calls.

URL layout:
    ``<repository>/<groupId with dots as slashes>/<artifactId>/maven-metadata.xml``

    For example ``https://maven.fabricmc.net/`` + ``net.fabricmc.fabric-api``
    + ``fabric-api`` gives
    ``https://maven.fabricmc.net/net/fabricmc/fabric-api/fabric-api/maven-metadata.xml``.

Error Handling:
    Every failure (HTTP status, connection, malformed XML, missing
    ``versioning/versions`` element, empty ``<version>``) raises
    ListingQueryFailed, chained with 'from err' where there is a cause. The
    resolution loop treats these as "no versions for this trial".

Example:
    ```python
    from moddeps.discovery import MavenListingSource

    source = MavenListingSource()
    versions = source.fetch_listing(
        "https://maven.fabricmc.net", "net.fabricmc.fabric-api", "fabric-api"
    )
    ```
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import requests

from moddeps.exceptions import ListingQueryFailed
from moddeps.logging import Logger, get_global_logger

METADATA_FILENAME = "maven-metadata.xml"
DEFAULT_TIMEOUT = 30


def metadata_url(repository: str, group_id: str, artifact_id: str) -> str:
    """Build the maven-metadata.xml URL for one artifact."""
    base = repository if repository.endswith("/") else repository + "/"
    group_path = group_id.replace(".", "/")
    return f"{base}{group_path}/{artifact_id}/{METADATA_FILENAME}"


def parse_metadata(text: str) -> list[str]:
    """Extract ``metadata/versioning/versions/version`` texts in order.

    Raises:
        ListingQueryFailed: If the document is not XML, has no versions
            element, or contains an empty version.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as err:
        raise ListingQueryFailed(f"Invalid maven-metadata.xml: {err}") from err

    versions_elem = root.find("versioning/versions")
    if root.tag != "metadata" or versions_elem is None:
        raise ListingQueryFailed("Could not find versions in maven-metadata.xml")

    versions: list[str] = []
    for version_elem in versions_elem.findall("version"):
        text_value = (version_elem.text or "").strip()
        if not text_value:
            raise ListingQueryFailed("Some version in maven-metadata.xml is empty")
        versions.append(text_value)
    return versions


class MavenListingSource:
    """ListingSource backed by Maven repositories over HTTP.

    Attributes:
        timeout: Request timeout in seconds.
        session: requests session (or the requests module) used for GETs.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.timeout = timeout
        self.session = session
        self.logger = logger

    def fetch_listing(
        self, repository: str, group_id: str, artifact_id: str
    ) -> list[str]:
        """Fetch and parse the version listing of one artifact.

        Args:
            repository: Repository base URL (trailing slash optional).
            group_id: Dotted group id.
            artifact_id: Concrete artifact id.

        Returns:
            Version strings in document order.

        Raises:
            ListingQueryFailed: On any HTTP, network or document error.
        """
        logger = self.logger if self.logger is not None else get_global_logger()
        url = metadata_url(repository, group_id, artifact_id)
        getter = self.session if self.session is not None else requests

        logger.debug("MAVEN", f"GET {url}")
        try:
            response = getter.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise ListingQueryFailed(
                f"Listing request failed for {group_id}:{artifact_id}: "
                f"{response.status_code} {response.reason}"
            ) from err
        except requests.exceptions.RequestException as err:
            raise ListingQueryFailed(
                f"Failed to fetch listing for {group_id}:{artifact_id}: {err}"
            ) from err

        versions = parse_metadata(response.text)
        logger.debug("MAVEN", f"{artifact_id}: {len(versions)} version(s) listed")
        return versions
