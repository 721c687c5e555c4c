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

"""Dependency declaration loader for moddeps.

Reads ``modding-dependencies.yml`` and turns every entry into an immutable
Dependency with compiled patterns. Everything is validated eagerly, before
any network activity, so a malformed file never starts a partial run.

File Format
-----------
The document is a list of dependency entries:

    - repository: https://maven.terraformersmc.com/
      groupId: com.terraformersmc
      artifactId: modmenu
      version: "*"
      properties:
        modmenu_version:
          source: version

    - repository: https://maven.fabricmc.net/
      groupId: net.fabricmc.fabric-api
      artifactId: fabric-api
      version: "${fabric}+${mcVersion}"
      properties:
        fabric_version:
          source: version
        fabric_api:
          source: wildcard
          name: fabric

Property Sources
----------------
  - **version**: the matched version string
  - **artifactId**: the artifact id the version was found under
  - **wildcard**: a contextual wildcard (mcVersion, mcVersionFull, mcMajor,
    mcMinor, mcPatch) or a named wildcard of the version pattern; ``name``
    defaults to the property name

Error Handling
--------------
- ConfigError: Missing/empty file, YAML parse errors, missing fields
  (``properties`` included), wrong structure or types
- PatternSyntaxError: Unclosed ``${`` or a trailing ``$`` in a pattern
- InvalidPatternUse: ``*`` or a named wildcard in an artifactId pattern
- UnresolvedProperty: A wildcard property naming nothing resolvable

Messages are prefixed with the location of the offending entry, for example
``dependencies[2].properties.fabric_api: ...``.

Example:
    ```python
    from pathlib import Path
    from moddeps.config import load_dependencies

    dependencies = load_dependencies(Path("modding-dependencies.yml"))
    for dep in dependencies:
        print(dep.coordinates, list(dep.properties))
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from moddeps.dependency import PROPERTY_KINDS, Dependency, PropertySource
from moddeps.exceptions import ConfigError, UnresolvedProperty
from moddeps.logging import Logger, get_global_logger
from moddeps.pattern import (
    check_artifact_id_pattern,
    compile_pattern,
    is_contextual_name,
    named_wildcards,
)

DEFAULT_CONFIG_FILE = "modding-dependencies.yml"

_REQUIRED_STRINGS = ("repository", "groupId", "artifactId", "version")

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, or is
            empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def _located(location: str, err: ConfigError) -> ConfigError:
    """Return a copy of ``err`` (same class) with ``location`` prepended."""
    return type(err)(f"{location}: {err}")


# -------------------------------
# Entry parsing
# -------------------------------


def _parse_property(
    name: Any, raw: Any, captured: list[str], location: str
) -> PropertySource:
    if not isinstance(name, str) or not name:
        raise ConfigError(f"{location}: property names must be non-empty strings")
    if not isinstance(raw, dict):
        raise ConfigError(f"{location}: must be a mapping with a 'source' key")

    kind = raw.get("source")
    if kind not in PROPERTY_KINDS:
        allowed = ", ".join(repr(k) for k in PROPERTY_KINDS)
        raise ConfigError(f"{location}.source: must be one of {allowed}, got {kind!r}")

    unknown = set(raw) - {"source", "name"}
    if unknown:
        raise ConfigError(f"{location}: unknown key(s): {', '.join(sorted(unknown))}")

    if kind != "wildcard":
        if "name" in raw:
            raise ConfigError(f"{location}.name: only allowed with source 'wildcard'")
        return PropertySource(kind=kind)

    wildcard_name = raw.get("name", name)
    if not isinstance(wildcard_name, str):
        raise ConfigError(f"{location}.name: must be a string")
    if not is_contextual_name(wildcard_name) and wildcard_name not in captured:
        raise UnresolvedProperty(
            f"{location}: wildcard {wildcard_name!r} is neither a contextual "
            "wildcard nor a named wildcard of the version pattern"
        )
    return PropertySource(kind="wildcard", wildcard_name=wildcard_name)


def parse_dependency(entry: Any, index: int) -> Dependency:
    """Validate one declaration entry and compile its patterns.

    Args:
        entry: Parsed YAML value of the entry.
        index: Position of the entry in the document, for messages.

    Returns:
        The compiled declaration.

    Raises:
        ConfigError: Or one of its subclasses, prefixed with the location.
    """
    location = f"dependencies[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{location}: each dependency must be a mapping")

    for key in _REQUIRED_STRINGS:
        if key not in entry:
            raise ConfigError(f"{location}: missing required field {key!r}")
        if not isinstance(entry[key], str):
            raise ConfigError(f"{location}.{key}: must be a string")
    for key in ("repository", "groupId"):
        if not entry[key].strip():
            raise ConfigError(f"{location}.{key}: cannot be empty")

    try:
        artifact_id = compile_pattern(entry["artifactId"])
        check_artifact_id_pattern(artifact_id)
    except ConfigError as err:
        raise _located(f"{location}.artifactId", err) from err
    try:
        version = compile_pattern(entry["version"])
    except ConfigError as err:
        raise _located(f"{location}.version", err) from err

    if "properties" not in entry:
        raise ConfigError(f"{location}: missing required field 'properties'")
    raw_properties = entry["properties"]
    if not isinstance(raw_properties, dict):
        raise ConfigError(f"{location}.properties: must be a mapping")

    captured = named_wildcards(version)
    properties = {
        name: _parse_property(name, raw, captured, f"{location}.properties.{name}")
        for name, raw in raw_properties.items()
    }

    return Dependency(
        repository=entry["repository"],
        group_id=entry["groupId"],
        artifact_id=artifact_id,
        version=version,
        properties=properties,
        artifact_id_pattern=entry["artifactId"],
    )


def read_entries(path: Path) -> list[Any]:
    """Read the raw entry list from a declarations file.

    Raises:
        ConfigError: If the file cannot be read or the top level is not a
            list.
    """
    data = _load_yaml_file(path)
    if not isinstance(data, list):
        raise ConfigError(f"top-level YAML must be a list of dependencies: {path}")
    return data


# -------------------------------
# Public API
# -------------------------------


def load_dependencies(
    path: Path, logger: Logger | None = None
) -> list[Dependency]:
    """Load and validate every declaration of a file.

    Args:
        path: Path to the declarations YAML file.
        logger: Logger instance; defaults to the global logger.

    Returns:
        Declarations in file order.

    Raises:
        ConfigError: On the first invalid entry (or file-level problem).
    """
    logger = logger if logger is not None else get_global_logger()
    logger.verbose("CONFIG", f"Loading dependencies: {path}")

    dependencies = [
        parse_dependency(entry, index) for index, entry in enumerate(read_entries(path))
    ]
    for dep in dependencies:
        logger.debug(
            "CONFIG",
            f"{dep.coordinates} from {dep.repository} "
            f"-> {', '.join(dep.properties) or '(no properties)'}",
        )
    logger.verbose("CONFIG", f"Loaded {len(dependencies)} dependency declaration(s)")
    return dependencies
