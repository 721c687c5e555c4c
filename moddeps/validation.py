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

"""Declarations file validation module.

This module checks a dependency declarations file without making network
calls. Unlike load_dependencies(), which stops at the first problem, it
collects the error of every entry so all of them can be fixed in one go.

Validation Checks:

- YAML syntax is valid and the document is a list
- Each entry has repository, groupId, artifactId and version strings
- Patterns compile and artifactId has no capturing wildcards
- Property sources are known and wildcard names are resolvable

Warnings:

- A dependency declares an empty properties mapping (it would be resolved for nothing)
- The same property name is declared by more than one dependency (the last
  one wins when the properties file is written)

Example:
    Validate a file and handle results:
        ```python
        from pathlib import Path
        from moddeps.validation import validate_config

        result = validate_config(Path("modding-dependencies.yml"))
        if result.status == "valid":
            print(f"{result.dependency_count} dependencies declared")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path

from moddeps.config.loader import parse_dependency, read_entries
from moddeps.exceptions import ConfigError
from moddeps.logging import Logger, get_global_logger
from moddeps.results import ValidationResult

__all__ = ["validate_config"]


def validate_config(path: Path, logger: Logger | None = None) -> ValidationResult:
    """Validate a declarations file without touching the network.

    Args:
        path: Path to the declarations YAML file.
        logger: Logger instance; defaults to the global logger.

    Returns:
        Validation status, errors, warnings and the number of entries.

    """
    logger = logger if logger is not None else get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []

    logger.verbose("VALIDATION", f"Validating: {path}")
    try:
        entries = read_entries(path)
    except ConfigError as err:
        errors.append(str(err))
        return ValidationResult(
            status="invalid",
            errors=errors,
            warnings=warnings,
            dependency_count=0,
            config_path=str(path),
        )

    if not entries:
        warnings.append("No dependencies declared")

    declared_by: dict[str, list[int]] = {}
    for index, entry in enumerate(entries):
        try:
            dependency = parse_dependency(entry, index)
        except ConfigError as err:
            errors.append(str(err))
            continue

        logger.verbose("VALIDATION", f"[OK] dependencies[{index}]: {dependency.coordinates}")
        if not dependency.properties:
            warnings.append(
                f"dependencies[{index}] ({dependency.coordinates}) "
                "declares an empty properties mapping"
            )
        for name in dependency.properties:
            declared_by.setdefault(name, []).append(index)

    for name, indexes in declared_by.items():
        if len(indexes) > 1:
            where = ", ".join(f"dependencies[{i}]" for i in indexes)
            warnings.append(f"Property {name!r} is declared more than once: {where}")

    return ValidationResult(
        status="invalid" if errors else "valid",
        errors=errors,
        warnings=warnings,
        dependency_count=len(entries),
        config_path=str(path),
    )
