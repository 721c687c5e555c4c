"""
Pytest configuration and shared fixtures for moddeps tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from moddeps.exceptions import ListingQueryFailed
from moddeps.logging import SilentLogger, set_global_logger


class FakeListingSource:
    """In-memory ListingSource keyed by artifact id.

    A listing value can be a list of versions or an exception instance to
    raise. Unknown artifact ids raise ListingQueryFailed. Every query is
    recorded in ``calls``.
    """

    def __init__(self, listings: dict[str, Any] | None = None):
        self.listings = dict(listings or {})
        self.calls: list[tuple[str, str, str]] = []

    def fetch_listing(
        self, repository: str, group_id: str, artifact_id: str
    ) -> list[str]:
        self.calls.append((repository, group_id, artifact_id))
        listing = self.listings.get(artifact_id)
        if listing is None:
            raise ListingQueryFailed(f"Not 2xx status code: 404 for {artifact_id}")
        if isinstance(listing, Exception):
            raise listing
        return list(listing)

    @property
    def queried_artifacts(self) -> list[str]:
        return [artifact_id for _, _, artifact_id in self.calls]


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Keep the global logger silent between tests."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_declarations() -> list[dict[str, Any]]:
    """
    Provide sample dependency declarations.

    Covers a plain version, a version tied to mcVersion with a named
    wildcard, and an artifact id that depends on the Minecraft version.
    """
    return [
        {
            "repository": "https://maven.terraformersmc.com/",
            "groupId": "com.terraformersmc",
            "artifactId": "modmenu",
            "version": "*",
            "properties": {"modmenu_version": {"source": "version"}},
        },
        {
            "repository": "https://maven.fabricmc.net",
            "groupId": "net.fabricmc.fabric-api",
            "artifactId": "fabric-api",
            "version": "${fabric}+${mcVersion}",
            "properties": {
                "fabric_version": {"source": "version"},
                "fabric_api": {"source": "wildcard", "name": "fabric"},
            },
        },
        {
            "repository": "https://masa.dy.fi/maven",
            "groupId": "fi.dy.masa.malilib",
            "artifactId": "malilib-fabric-${mcVersion}",
            "version": "*",
            "properties": {
                "malilib_artifact": {"source": "artifactId"},
                "malilib_version": {"source": "version"},
            },
        },
    ]


@pytest.fixture
def sample_listings() -> dict[str, list[str]]:
    """Listings matching sample_declarations for Minecraft 1.20.x."""
    return {
        "modmenu": ["7.2.1", "7.2.2", "9.0.0-pre.1", "9.0.0"],
        "fabric-api": [
            "0.90.0+1.20.1",
            "0.91.0+1.20.1",
            "0.91.0+1.20.2",
            "0.92.0+1.20.4",
        ],
        "malilib-fabric-1.20.1": ["0.16.0", "0.16.1"],
    }


@pytest.fixture
def fake_source(sample_listings) -> FakeListingSource:
    """Provide a FakeListingSource loaded with sample_listings."""
    return FakeListingSource(sample_listings)


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yml", [{"key": "value"}])
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, sort_keys=False)
        return path

    return _create


@pytest.fixture
def create_properties_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary properties files.

    The text is written as-is (newline translation disabled).
    """

    def _create(text: str, filename: str = "gradle.properties") -> Path:
        path = tmp_test_dir / filename
        with path.open("w", encoding="iso-8859-1", newline="") as f:
            f.write(text)
        return path

    return _create


@pytest.fixture
def make_source():
    """
    Factory fixture for FakeListingSource.

    Usage:
        source = make_source({"modmenu": ["9.0.0"]})
    """
    return FakeListingSource
