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

"""Build-configuration state for moddeps.

The state moddeps keeps in sync is the project's ``gradle.properties``: the
platform version key (``minecraft_version``) and one key per declared
dependency property. It is read once before resolution and written once
after, keeping comments, ordering and untouched entries as they were.

Public API:

- PropertiesFile: Editable ``.properties`` document
- load_properties: Load a properties file
- save_properties: Save a properties document

Example:
    Basic usage:

        from pathlib import Path
        from moddeps.state import load_properties, save_properties

        props = load_properties(Path("gradle.properties"))
        props.set("modmenu_version", "9.0.0")
        save_properties(props)

"""

from .properties import (
    PROPERTIES_ENCODING,
    PropertiesFile,
    escape_text,
    load_properties,
    save_properties,
)

__all__ = [
    "PROPERTIES_ENCODING",
    "PropertiesFile",
    "escape_text",
    "load_properties",
    "save_properties",
]
