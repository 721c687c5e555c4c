"""
moddeps - Minecraft mod dependency updater

A Python-based CLI tool that keeps the dependency versions in a Minecraft mod
project's gradle.properties in sync with what is published on Maven
repositories.

moddeps provides:
  - Declarative YAML dependency declarations with artifact/version patterns
    tied to the Minecraft version (${mcVersion}, ${mcMinor}, ...)
  - Patch fallback: mods published only for 1.20.1 still match 1.20.4
  - Version ranking that understands rc/snapshot/release style qualifiers
  - Optional bump of minecraft_version to the latest released patch
  - Layout-preserving rewrite of gradle.properties
  - GitHub Actions friendly output (any_update)

Quick Start
-----------
Validate the declarations file:

    $ moddeps validate

Update gradle.properties:

    $ moddeps update --update-platform-patch

For full CLI documentation:

    $ moddeps --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration functions.
config : package
    YAML declaration loading and run settings.
pattern : package
    Pattern compiler and contextualization.
versioning : package
    Version ordering and the platform version type.
resolver : module
    Trial-based resolution loop.
discovery : package
    Maven listing source and Minecraft release catalog.
state : package
    gradle.properties reading and writing.

Public API
----------
The primary interface is the CLI, but key functions are exported for
programmatic use:

    from moddeps.core import update_properties, resolve_config
    from moddeps.validation import validate_config
    from moddeps.config import load_dependencies, load_settings
    from moddeps.resolver import resolve_dependency

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__description__ = "Keep Minecraft mod dependencies in gradle.properties up to date"

# Re-export commonly used functions for convenience
from moddeps.config import load_dependencies, load_settings
from moddeps.core import resolve_config, update_properties
from moddeps.resolver import resolve_dependency
from moddeps.validation import validate_config
from moddeps.versioning import DependencyVersion, PlatformVersion, compare_versions

__all__ = [
    "__version__",
    "DependencyVersion",
    "PlatformVersion",
    "compare_versions",
    "load_dependencies",
    "load_settings",
    "resolve_config",
    "resolve_dependency",
    "update_properties",
    "validate_config",
]
