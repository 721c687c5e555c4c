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

"""Command-line interface for moddeps.

This module provides the main CLI entry point for the moddeps tool.

Commands:

    update: Resolve dependencies and update gradle.properties
    validate: Validate the declarations file (no network)
    resolve: Resolve dependencies for a given Minecraft version and print
        the properties (no file is written)

Example:
    Update gradle.properties in the current directory:
        ```bash
        $ moddeps update
        ```

    Also move minecraft_version to its latest patch, tolerating failures:
        ```bash
        $ moddeps update --update-platform-patch --tolerable
        ```

    Check the declarations file:
        ```bash
        $ moddeps validate --config modding-dependencies.yml
        ```

    Preview versions for another Minecraft version:
        ```bash
        $ moddeps resolve --minecraft-version 1.20.4
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, network, or resolution failure)

Note:
    Flags that are not given fall back to MODDEPS_* environment variables
    (see moddeps.config.settings). When GITHUB_OUTPUT is set, 'update'
    appends ``any_update=true|false`` to that file so workflows can decide
    whether to open a pull request.

"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
import sys

from moddeps import __version__
from moddeps.config import DEFAULT_CONFIG_FILE, load_settings
from moddeps.core import DEFAULT_PROPERTIES_FILE, resolve_config, update_properties
from moddeps.exceptions import ModdepsError
from moddeps.logging import get_logger, set_global_logger
from moddeps.validation import validate_config
from moddeps.versioning import PlatformVersion

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def _print_error(err: Exception, args: argparse.Namespace) -> None:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        import traceback

        traceback.print_exc()


def write_github_output(name: str, value: str) -> bool:
    """Append ``name=value`` to the file named by GITHUB_OUTPUT, if set."""
    output = os.environ.get(GITHUB_OUTPUT_ENV)
    if not output:
        return False
    with open(output, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True


def cmd_update(args: argparse.Namespace) -> int:
    """Handler for 'moddeps update' command.

    Reads gradle.properties, optionally bumps minecraft_version to its latest
    patch, resolves every declared dependency and writes the new property
    values back in a single write.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    config_path = Path(args.config).resolve()
    properties_path = Path(args.properties).resolve()

    print(f"Declarations: {config_path}")
    print(f"Properties:   {properties_path}")
    print()

    try:
        settings = load_settings(
            update_platform_patch=args.update_platform_patch,
            update_only_with_platform=args.only_with_platform,
            tolerable=args.tolerable,
            trial_delay=args.delay,
            max_workers=args.workers,
            dry_run=args.dry_run,
        )
        result = update_properties(
            config_path, properties_path, settings=settings, logger=logger
        )
    except ModdepsError as err:
        _print_error(err, args)
        return 1

    print("=" * 70)
    print("UPDATE RESULTS")
    print("=" * 70)
    platform = str(result.platform_after)
    if result.platform_changed:
        platform = f"{result.platform_before} => {result.platform_after}"
    print(f"Minecraft:   {platform}")
    for change in result.changes:
        marker = "*" if change.changed else " "
        print(f"  {marker} {change.name}: {change.old_value} => {change.new_value}")
    for skip in result.skipped:
        print(f"  [SKIPPED] {skip.coordinates}: {skip.error}")
    if not result.dependencies_resolved:
        print("  (dependencies not resolved: minecraft_version unchanged)")
    print(f"Updated:     {result.updated_count}/{result.total_count}")
    print(f"Written:     {'yes' if result.written else 'no (dry run)'}")
    print("=" * 70)

    write_github_output("any_update", "true" if result.any_update else "false")

    print()
    print("[SUCCESS] Properties are up to date!")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'moddeps validate' command.

    Validates the declarations file without making network calls.

    Args:
        args: Parsed command-line arguments containing
            config path and verbose flag.

    Returns:
        Exit code (0 for valid file, 1 for invalid).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    config_path = Path(args.config).resolve()

    print(f"Validating declarations: {config_path}")
    print()

    result = validate_config(config_path, logger=logger)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config:       {result.config_path}")
    print(f"Status:       {result.status.upper()}")
    print(f"Dependencies: {result.dependency_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Declarations are valid!")
        return 0
    print()
    print(f"[FAILED] Validation failed with {len(result.errors)} error(s).")
    return 1


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'moddeps resolve' command.

    Resolves every declaration against the given Minecraft version and prints
    the resulting properties. Nothing is written.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    config_path = Path(args.config).resolve()
    platform_version = PlatformVersion.parse(args.minecraft_version)

    try:
        settings = load_settings(
            tolerable=args.tolerable,
            trial_delay=args.delay,
            max_workers=args.workers,
        )
        result = resolve_config(
            config_path, platform_version, settings=settings, logger=logger
        )
    except ModdepsError as err:
        _print_error(err, args)
        return 1

    print("=" * 70)
    print(f"RESOLVED FOR MINECRAFT {result.platform_version}")
    print("=" * 70)
    for resolution in result.resolutions:
        print(
            f"{resolution.dependency.group_id}:{resolution.artifact_id} "
            f"{resolution.version}"
        )
    print()
    for name, value in result.properties.items():
        print(f"{name}={value}")
    for skip in result.skipped:
        print(f"[SKIPPED] {skip.coordinates}: {skip.error}")
    print("=" * 70)
    return 0


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _add_resolution_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Dependency declarations file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--tolerable",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Skip dependencies that cannot be resolved instead of failing",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between repository queries of one dependency (default: 1.0)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Dependencies resolved in parallel (default: 8)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moddeps",
        description="moddeps - keep Minecraft mod dependencies in gradle.properties up to date",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"moddeps {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'update' command
    parser_update = subparsers.add_parser(
        "update",
        help="Resolve dependencies and update gradle.properties",
        description="Resolve the latest matching version of every declared dependency and write the properties file.",
    )
    _add_resolution_flags(parser_update)
    parser_update.add_argument(
        "--properties",
        default=DEFAULT_PROPERTIES_FILE,
        help=f"Properties file to update (default: {DEFAULT_PROPERTIES_FILE})",
    )
    parser_update.add_argument(
        "--update-platform-patch",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Move minecraft_version to the latest patch of its minor version",
    )
    parser_update.add_argument(
        "--only-with-platform",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only resolve dependencies when minecraft_version changed",
    )
    parser_update.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show what would change without writing the properties file",
    )
    _add_output_flags(parser_update)
    parser_update.set_defaults(func=cmd_update)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate the declarations file (no network)",
        description="Check the declarations YAML for structure and pattern errors without making network calls.",
    )
    parser_validate.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Dependency declarations file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'resolve' command
    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Resolve dependencies for a Minecraft version and print them",
        description="Resolve every declaration against the given Minecraft version without touching any file.",
    )
    parser_resolve.add_argument(
        "--minecraft-version",
        required=True,
        help="Minecraft version to resolve against (e.g. 1.20.4)",
    )
    _add_resolution_flags(parser_resolve)
    _add_output_flags(parser_resolve)
    parser_resolve.set_defaults(func=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the moddeps CLI.

    This function is registered as the 'moddeps' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
