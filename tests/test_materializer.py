"""
Tests for moddeps.materializer module.
"""

from __future__ import annotations

import pytest

from moddeps.config import parse_dependency
from moddeps.dependency import Dependency, PropertySource
from moddeps.exceptions import UnresolvedProperty
from moddeps.materializer import materialize_properties, materialize_property
from moddeps.pattern import compile_pattern
from moddeps.resolver import resolve_dependency
from moddeps.versioning import PlatformVersion


class TestMaterializeProperties:
    """Tests for computing property values from a resolution."""

    def test_version_and_named_wildcard(self, sample_declarations, fake_source):
        """Test version and named wildcard sources."""
        dep = parse_dependency(sample_declarations[1], 1)
        resolution = resolve_dependency(
            dep, PlatformVersion(1, 20, 1), fake_source, delay=0
        )
        assert materialize_properties(dep, resolution) == {
            "fabric_version": "0.91.0+1.20.1",
            "fabric_api": "0.91.0",
        }

    def test_artifact_id_source(self, sample_declarations, fake_source):
        """Test the artifactId source uses the winning trial."""
        dep = parse_dependency(sample_declarations[2], 2)
        resolution = resolve_dependency(
            dep, PlatformVersion(1, 20, 2), fake_source, delay=0
        )
        assert materialize_properties(dep, resolution) == {
            "malilib_artifact": "malilib-fabric-1.20.1",
            "malilib_version": "0.16.1",
        }

    def test_declaration_order(self, sample_declarations, fake_source):
        """Test that properties come out in declaration order."""
        dep = parse_dependency(sample_declarations[2], 2)
        resolution = resolve_dependency(
            dep, PlatformVersion(1, 20, 1), fake_source, delay=0
        )
        assert list(materialize_properties(dep, resolution)) == [
            "malilib_artifact",
            "malilib_version",
        ]

    def test_contextual_wildcard_uses_winning_context(self, make_source):
        """Test contextual wildcards evaluate under the winning trial."""
        dep = parse_dependency(
            {
                "repository": "https://maven.example.com",
                "groupId": "com.example",
                "artifactId": "example-${mcVersion}",
                "version": "*",
                "properties": {
                    "example_mc": {"source": "wildcard", "name": "mcVersion"},
                    "example_mc_full": {"source": "wildcard", "name": "mcVersionFull"},
                    "mcMinor": {"source": "wildcard"},
                },
            },
            0,
        )
        source = make_source({"example-1.20": ["2.0.0"]})
        resolution = resolve_dependency(dep, PlatformVersion(1, 20, 2), source, delay=0)
        assert materialize_properties(dep, resolution) == {
            "example_mc": "1.20",
            "example_mc_full": "1.20.0",
            "mcMinor": "20",
        }

    def test_duplicate_named_wildcard_uses_first(self, make_source):
        """Test that a repeated name resolves to its first occurrence."""
        dep = parse_dependency(
            {
                "repository": "https://maven.example.com",
                "groupId": "com.example",
                "artifactId": "example",
                "version": "${v}-${v}",
                "properties": {"v": {"source": "wildcard"}},
            },
            0,
        )
        source = make_source({"example": ["1-2"]})
        resolution = resolve_dependency(dep, PlatformVersion(1, 20, 1), source, delay=0)
        assert materialize_properties(dep, resolution) == {"v": "1"}


class TestMaterializeProperty:
    """Tests for single property sources."""

    def test_unresolvable_wildcard(self, make_source):
        """Test a hand-built declaration with an unknown wildcard."""
        dep = Dependency(
            repository="https://maven.example.com",
            group_id="com.example",
            artifact_id=compile_pattern("example"),
            version=compile_pattern("*"),
            artifact_id_pattern="example",
        )
        source = make_source({"example": ["1.0"]})
        resolution = resolve_dependency(dep, PlatformVersion(1, 20, 1), source, delay=0)
        with pytest.raises(UnresolvedProperty, match="missing"):
            materialize_property(
                dep, resolution, PropertySource("wildcard", wildcard_name="missing")
            )
