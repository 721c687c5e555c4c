"""
Tests for moddeps.discovery module.

Tests listing and catalog sources including:
- maven-metadata.xml URL building and parsing
- HTTP error handling of the Maven listing source
- Reduction of the version manifest to latest patches
"""

from __future__ import annotations

import pytest
import requests
import requests_mock

from moddeps.discovery import (
    VERSION_MANIFEST_URL,
    MavenListingSource,
    fetch_platform_patches,
    latest_patches,
    metadata_url,
    parse_metadata,
)
from moddeps.exceptions import ListingQueryFailed, NetworkError

FABRIC_API_URL = (
    "https://maven.fabricmc.net/net/fabricmc/fabric-api/fabric-api/maven-metadata.xml"
)

FABRIC_API_METADATA = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <groupId>net.fabricmc.fabric-api</groupId>
  <artifactId>fabric-api</artifactId>
  <versioning>
    <latest>0.92.0+1.20.4</latest>
    <release>0.92.0+1.20.4</release>
    <versions>
      <version>0.90.0+1.20.1</version>
      <version>0.91.0+1.20.1</version>
      <version> 0.92.0+1.20.4 </version>
    </versions>
    <lastUpdated>20231207101012</lastUpdated>
  </versioning>
</metadata>
"""


class TestMetadataUrl:
    """Tests for maven-metadata.xml URL building."""

    def test_trailing_slash_added(self):
        """Test a repository without trailing slash."""
        assert (
            metadata_url("https://maven.fabricmc.net", "net.fabricmc.fabric-api", "fabric-api")
            == FABRIC_API_URL
        )

    def test_trailing_slash_kept(self):
        """Test a repository with trailing slash."""
        assert (
            metadata_url("https://maven.fabricmc.net/", "net.fabricmc.fabric-api", "fabric-api")
            == FABRIC_API_URL
        )


class TestParseMetadata:
    """Tests for maven-metadata.xml parsing."""

    def test_versions_in_order(self):
        """Test that versions are returned trimmed and in order."""
        assert parse_metadata(FABRIC_API_METADATA) == [
            "0.90.0+1.20.1",
            "0.91.0+1.20.1",
            "0.92.0+1.20.4",
        ]

    def test_empty_versions(self):
        """Test a versions element without children."""
        text = "<metadata><versioning><versions/></versioning></metadata>"
        assert parse_metadata(text) == []

    def test_invalid_xml(self):
        """Test that malformed XML raises ListingQueryFailed."""
        with pytest.raises(ListingQueryFailed, match="Invalid maven-metadata.xml"):
            parse_metadata("<metadata><versioning>")

    def test_missing_versions(self):
        """Test a document without versioning/versions."""
        with pytest.raises(ListingQueryFailed, match="Could not find versions"):
            parse_metadata("<metadata><versioning/></metadata>")

    def test_wrong_root(self):
        """Test a document that is not maven metadata."""
        with pytest.raises(ListingQueryFailed, match="Could not find versions"):
            parse_metadata("<html><versioning><versions/></versioning></html>")

    def test_empty_version(self):
        """Test that an empty version element is rejected."""
        text = (
            "<metadata><versioning><versions>"
            "<version>1.0</version><version> </version>"
            "</versions></versioning></metadata>"
        )
        with pytest.raises(ListingQueryFailed, match="empty"):
            parse_metadata(text)


class TestMavenListingSource:
    """Tests for the HTTP listing source."""

    def test_fetch_listing(self):
        """Test a successful listing request."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, text=FABRIC_API_METADATA)

            versions = MavenListingSource().fetch_listing(
                "https://maven.fabricmc.net", "net.fabricmc.fabric-api", "fabric-api"
            )

            assert versions[-1] == "0.92.0+1.20.4"
            assert m.call_count == 1

    def test_timeout_passed(self):
        """Test that the configured timeout is used."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, text=FABRIC_API_METADATA)

            MavenListingSource(timeout=5).fetch_listing(
                "https://maven.fabricmc.net", "net.fabricmc.fabric-api", "fabric-api"
            )

            assert m.request_history[0].timeout == 5

    def test_session_used(self):
        """Test that an explicit session performs the request."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, text=FABRIC_API_METADATA)
            with requests.Session() as session:
                versions = MavenListingSource(session=session).fetch_listing(
                    "https://maven.fabricmc.net/",
                    "net.fabricmc.fabric-api",
                    "fabric-api",
                )
            assert len(versions) == 3

    def test_http_error(self):
        """Test that a 404 raises ListingQueryFailed."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, status_code=404)

            with pytest.raises(ListingQueryFailed, match="404"):
                MavenListingSource().fetch_listing(
                    "https://maven.fabricmc.net",
                    "net.fabricmc.fabric-api",
                    "fabric-api",
                )

    def test_connection_error(self):
        """Test that network failures raise ListingQueryFailed."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, exc=requests.exceptions.ConnectTimeout)

            with pytest.raises(ListingQueryFailed, match="Failed to fetch listing"):
                MavenListingSource().fetch_listing(
                    "https://maven.fabricmc.net",
                    "net.fabricmc.fabric-api",
                    "fabric-api",
                )

    def test_bad_document(self):
        """Test that a 200 with a non-metadata body fails the query."""
        with requests_mock.Mocker() as m:
            m.get(FABRIC_API_URL, text="<html><body>Not here</body></html>")

            with pytest.raises(ListingQueryFailed):
                MavenListingSource().fetch_listing(
                    "https://maven.fabricmc.net",
                    "net.fabricmc.fabric-api",
                    "fabric-api",
                )


class TestLatestPatches:
    """Tests for the version manifest reduction."""

    def test_releases_only(self):
        """Test that snapshots and pre-releases are ignored."""
        manifest = {
            "latest": {"release": "1.20.4", "snapshot": "24w03a"},
            "versions": [
                {"id": "24w03a", "type": "snapshot"},
                {"id": "1.20.5-pre1", "type": "snapshot"},
                {"id": "1.20.4", "type": "release"},
                {"id": "1.20.3", "type": "release"},
                {"id": "1.20", "type": "release"},
                {"id": "1.19.4", "type": "release"},
                {"id": "1.19", "type": "release"},
                {"id": "b1.7.3", "type": "old_beta"},
            ],
        }
        assert latest_patches(manifest) == {20: 4, 19: 4}

    def test_minor_without_patch_release(self):
        """Test a minor whose only release is x.y."""
        manifest = {"versions": [{"id": "1.21", "type": "release"}]}
        assert latest_patches(manifest) == {21: 0}

    def test_missing_versions(self):
        """Test a manifest without a versions list."""
        with pytest.raises(NetworkError, match="no 'versions' list"):
            latest_patches({"latest": {}})

    def test_release_without_id(self):
        """Test a release entry without an id."""
        with pytest.raises(NetworkError, match="without a string id"):
            latest_patches({"versions": [{"type": "release"}]})


class TestFetchPlatformPatches:
    """Tests for fetching the version manifest."""

    def test_fetch(self):
        """Test a successful manifest request."""
        with requests_mock.Mocker() as m:
            m.get(
                VERSION_MANIFEST_URL,
                json={
                    "versions": [
                        {"id": "1.20.6", "type": "release"},
                        {"id": "1.20.1", "type": "release"},
                    ]
                },
            )
            assert fetch_platform_patches() == {20: 6}

    def test_http_error(self):
        """Test that an HTTP error raises NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(VERSION_MANIFEST_URL, status_code=503)
            with pytest.raises(NetworkError, match="503"):
                fetch_platform_patches()

    def test_invalid_json(self):
        """Test that a non-JSON body raises NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(VERSION_MANIFEST_URL, text="<html>maintenance</html>")
            with pytest.raises(NetworkError, match="Invalid JSON"):
                fetch_platform_patches()
