"""Command-line interface for sourcepath.

This module provides a CLI for inspecting how resource names resolve against
a set of source paths, without writing code.

Commands:
    paths: Display registered source locations
    resolve: Show where a resource name resolves
    read: Print the content of a resource
    manifest: Collect a manifest file from every source location
    ls: List archive entries under a prefix
    export: Write all embedded resources to a directory

Example:
    $ sourcepath resolve clojure/string.cljs -p ~/lib/cljs.jar -p src
    $ sourcepath read my/app/core.cljs -p src --search
    $ sourcepath manifest deps.cljs -p ~/lib/a.jar -p ~/lib/b.jar
    $ sourcepath ls ~/lib/cljs.jar cljs/core/
    $ sourcepath export ./sdk --config sourcepath.yaml
"""

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn

from sourcepath.exceptions import SourcePathError
from sourcepath.models import Mode, ResolverConfig
from sourcepath.parsing.config import ConfigLoader
from sourcepath.runtime.session import ResourceSession


def _add_session_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options every command uses to build its session."""
    parser.add_argument(
        "-p", "--source-path",
        dest="source_paths",
        action="append",
        default=[],
        help="Directory or .jar to search (can be specified multiple times)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file (optional)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        help="Embedded resource mode (overrides config)",
    )
    parser.add_argument(
        "--dev-dir",
        help="Build-output directory used in development mode (overrides config)",
    )
    parser.add_argument(
        "--embedded-root",
        help="Directory of pre-built embedded blobs used in packaged mode (overrides config)",
    )
    parser.add_argument(
        "--no-cwd",
        action="store_true",
        help="Do not register the current working directory as a source path",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="sourcepath",
        description="Resolve resource names against directories, archives and embedded resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    paths_parser = subparsers.add_parser(
        "paths",
        help="List registered source locations",
        description="Display source locations in search order with their kinds",
    )
    _add_session_arguments(paths_parser)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show where a resource resolves",
        description="Print the descriptor of the first source providing a resource",
    )
    resolve_parser.add_argument("name", help="Resource name (e.g. clojure/string.cljs)")
    _add_session_arguments(resolve_parser)

    read_parser = subparsers.add_parser(
        "read",
        help="Print the content of a resource",
        description="Resolve a resource and print its text",
    )
    read_parser.add_argument("name", help="Resource name")
    read_parser.add_argument(
        "--search",
        action="store_true",
        help="Use the combined search-and-read path (ignores embedded resources)",
    )
    _add_session_arguments(read_parser)

    manifest_parser = subparsers.add_parser(
        "manifest",
        help="Collect manifest files from every source",
        description="Print every occurrence of the given manifest files, in search order",
    )
    manifest_parser.add_argument("filenames", nargs="+", help="Manifest file names")
    _add_session_arguments(manifest_parser)

    ls_parser = subparsers.add_parser(
        "ls",
        help="List archive entries",
        description="List entries of an archive whose names start with a prefix",
    )
    ls_parser.add_argument("archive", type=Path, help="Path to the archive")
    ls_parser.add_argument("prefix", nargs="?", default="", help="Entry name prefix")

    export_parser = subparsers.add_parser(
        "export",
        help="Write embedded resources to a directory",
        description="Export every embedded resource (packaged mode only)",
    )
    export_parser.add_argument("outdir", type=Path, help="Output directory")
    _add_session_arguments(export_parser)

    return parser


def build_session(args: argparse.Namespace) -> ResourceSession:
    """Create a ResourceSession from config file and command-line overrides.

    Raises:
        ConfigError: If the config file is invalid
    """
    if args.config:
        config = ConfigLoader().load(args.config)
    else:
        config = ResolverConfig()

    config.source_paths = list(config.source_paths) + list(args.source_paths)
    if args.mode:
        config.mode = Mode(args.mode)
    if args.dev_dir:
        config.dev_dir = args.dev_dir
    if args.embedded_root:
        config.embedded_root = args.embedded_root
    if args.no_cwd:
        config.seed_cwd = False

    return ResourceSession.from_config(config)


def cmd_paths(args: argparse.Namespace) -> int:
    session = build_session(args)
    for location in session.registry.locations():
        print(f"{location.kind.value:<10} {location.path}")
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Execute the resolve command.

    Returns:
        Exit code (0 if found, 1 if not found)
    """
    session = build_session(args)
    descriptor = session.resolve(args.name)
    if descriptor is None:
        print(f"Not found: {args.name}", file=sys.stderr)
        return 1
    print(json.dumps(descriptor.to_dict(), indent=2))
    return 0


def cmd_read(args: argparse.Namespace) -> int:
    """Execute the read command.

    Returns:
        Exit code (0 if read, 1 if not found)
    """
    session = build_session(args)
    if args.search:
        content = session.read_source(args.name)
    else:
        descriptor = session.resolve(args.name)
        content = session.read(descriptor) if descriptor is not None else None

    if content is None:
        print(f"Not found: {args.name}", file=sys.stderr)
        return 1
    sys.stdout.write(content.text)
    return 0


def cmd_manifest(args: argparse.Namespace) -> int:
    session = build_session(args)
    matches = session.collect_manifest(args.filenames)
    if not matches:
        print("No manifests found.")
        return 0

    print(f"Found {len(matches)} manifest(s):\n")
    for match in matches:
        print(f";; {match.url}")
        print(match.text.rstrip("\n"))
        print()
    return 0


def cmd_ls(args: argparse.Namespace) -> int:
    session = ResourceSession()
    for entry in session.list_archive_entries(args.archive, args.prefix):
        print(entry)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    session = build_session(args)
    written = session.export_embedded(args.outdir)
    if not written:
        print("No embedded resources to export.")
        return 0
    print(f"Exported {len(written)} resource(s) to {args.outdir}")
    return 0


COMMANDS = {
    "paths": cmd_paths,
    "resolve": cmd_resolve,
    "read": cmd_read,
    "manifest": cmd_manifest,
    "ls": cmd_ls,
    "export": cmd_export,
}


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except SourcePathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def main() -> NoReturn:
    """Main entry point for the CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
