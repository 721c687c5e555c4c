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

"""Configuration loading for moddeps.

This package covers the two inputs of a run besides the properties file:

  - Dependency declarations (modding-dependencies.yml), compiled and
    validated eagerly by load_dependencies()
  - Run settings from MODDEPS_* environment variables (or .env) plus CLI
    overrides, via load_settings()

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from moddeps.config import load_dependencies, load_settings

        dependencies = load_dependencies(Path("modding-dependencies.yml"))
        settings = load_settings(dry_run=True)
        ```
"""

from .loader import DEFAULT_CONFIG_FILE, load_dependencies, parse_dependency
from .settings import RunSettings, load_settings, settings_from_env

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "RunSettings",
    "load_dependencies",
    "load_settings",
    "parse_dependency",
    "settings_from_env",
]
