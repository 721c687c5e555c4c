"""
Tests for declarations file validation.

This module tests the validation functionality that checks the declarations
file without making network calls.
"""

from __future__ import annotations

from moddeps.validation import validate_config


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config(self, create_yaml_file, sample_declarations):
        """Test that the sample declarations pass validation."""
        path = create_yaml_file("modding-dependencies.yml", sample_declarations)

        result = validate_config(path)

        assert result.status == "valid"
        assert result.dependency_count == 3
        assert result.errors == []
        assert result.warnings == []
        assert result.config_path == str(path)

    def test_valid_yaml_text(self, tmp_path):
        """Test a hand-written declarations file."""
        path = tmp_path / "modding-dependencies.yml"
        path.write_text(
            """
- repository: https://maven.fabricmc.net/
  groupId: net.fabricmc
  artifactId: fabric-loader
  version: "*"
  properties:
    loader_version:
      source: version
"""
        )

        result = validate_config(path)

        assert result.status == "valid"
        assert result.dependency_count == 1

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported as an error."""
        result = validate_config(tmp_path / "nonexistent.yml")

        assert result.status == "invalid"
        assert result.dependency_count == 0
        assert "file not found" in result.errors[0]

    def test_not_a_list(self, create_yaml_file):
        """Test that a mapping document is invalid."""
        path = create_yaml_file("deps.yml", {"dependencies": []})

        result = validate_config(path)

        assert result.status == "invalid"
        assert "must be a list" in result.errors[0]

    def test_collects_every_error(self, create_yaml_file, sample_declarations):
        """Test that errors of all entries are reported."""
        sample_declarations[0]["artifactId"] = "modmenu-*"
        sample_declarations[2]["version"] = "${broken"
        path = create_yaml_file("deps.yml", sample_declarations)

        result = validate_config(path)

        assert result.status == "invalid"
        assert len(result.errors) == 2
        assert result.errors[0].startswith("dependencies[0].artifactId")
        assert result.errors[1].startswith("dependencies[2].version")
        assert result.dependency_count == 3

    def test_empty_list_warns(self, create_yaml_file):
        """Test that an empty list is valid with a warning."""
        path = create_yaml_file("deps.yml", [])

        result = validate_config(path)

        assert result.status == "valid"
        assert result.warnings == ["No dependencies declared"]

    def test_empty_properties_warns(self, create_yaml_file, sample_declarations):
        """Test that an empty properties mapping is flagged."""
        sample_declarations[0]["properties"] = {}
        path = create_yaml_file("deps.yml", sample_declarations)

        result = validate_config(path)

        assert result.status == "valid"
        assert result.warnings == [
            "dependencies[0] (com.terraformersmc:modmenu) declares an empty properties mapping"
        ]

    def test_duplicate_property_warns(self, create_yaml_file, sample_declarations):
        """Test that a property declared twice is flagged."""
        sample_declarations[2]["properties"]["modmenu_version"] = {"source": "version"}
        path = create_yaml_file("deps.yml", sample_declarations)

        result = validate_config(path)

        assert result.status == "valid"
        assert len(result.warnings) == 1
        assert "'modmenu_version'" in result.warnings[0]
        assert "dependencies[0], dependencies[2]" in result.warnings[0]
