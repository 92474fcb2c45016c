"""CLI for aia-inspector."""

import argparse
import json
import os
import sys
from dataclasses import asdict

from aia_inspector.assembler import ProjectAssembler
from aia_inspector.bundle_reader import load_project, read_bundle
from aia_inspector.catalog.descriptor_catalog import CatalogBuilder, build_catalog
from aia_inspector.catalog.loader import FileDescriptorSource
from aia_inspector.domain.models import Component, InspectOptions, Project
from aia_inspector.errors import InspectorError
from aia_inspector.extensions import describe_extension
from aia_inspector.logging_config import configure_logging
from aia_inspector.summary import summarize


def inspect_bundle(bundle_path: str, options: InspectOptions) -> Project:
    """Main orchestration: bundle document -> assembled Project."""
    document = read_bundle(bundle_path)
    return load_project(document, ProjectAssembler(options=options))


def _print_summary(project: Project, options: InspectOptions, as_json: bool) -> None:
    summary = summarize(project, most_used_limit=options.most_used_limit)
    if as_json:
        data = summary.to_dict()
        data['extensions'] = [asdict(describe_extension(ext)) for ext in project.extensions]
        print(json.dumps(data, indent=2))
        return

    print(f"Project: {summary.name}")
    print(f"  Screens:    {summary.screen_count}")
    print(f"  Extensions: {summary.extension_count}")
    print(f"  Assets:     {summary.asset_count} ({summary.total_asset_size_readable})")
    print(f"  Blocks:     {summary.total_blocks}")
    for screen, count in summary.blocks_per_screen.items():
        print(f"    {screen}: {count}")

    if summary.most_used:
        print("Most used components:")
        for type_name, count in summary.most_used:
            print(f"  {type_name}: {count}")

    print("Origin share:")
    for origin, count in summary.origin_share.items():
        print(f"  {origin}: {count}")
    print("Block usage:")
    for kind, count in summary.block_kinds.items():
        print(f"  {kind}: {count}")

    for ext in project.extensions:
        info = describe_extension(ext)
        print(f"Extension: {info.name} {info.version_name} ({info.package}, {info.readable_size})")

    if summary.faulty_components:
        print("Faulty components:")
        for path in summary.faulty_components:
            print(f"  {path}")


def _print_tree(component: Component, depth: int = 0) -> None:
    marker = f" FAULTY: {component.error}" if component.faulty else ''
    print(f"{'  ' * depth}{component.name or '?'} ({component.type or '?'}) "
          f"[{component.origin.value}] {len(component.properties)} properties{marker}")
    for child in component.children:
        _print_tree(child, depth + 1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='aia-inspector', description='App Inventor project inspector')
    parser.add_argument('--workers', type=int, default=None, help='Worker threads for property resolution')
    parser.add_argument('--timeout', type=float, default=None, help='Seconds to wait for pooled resolution')
    parser.add_argument('--catalog', help='Descriptor JSON file to use instead of the bundled catalog')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--json-logs', action='store_true', help='Render logs as JSON lines')
    subparsers = parser.add_subparsers(dest='command')

    # summary command
    summary_parser = subparsers.add_parser('summary', help='Print project statistics')
    summary_parser.add_argument('bundle', help='Path to decoded bundle JSON')
    summary_parser.add_argument('--json', action='store_true', help='Print the summary as JSON')
    summary_parser.add_argument('--most-used', type=int, default=8, help='Length of the most used list (default: 8)')

    # tree command
    tree_parser = subparsers.add_parser('tree', help='Print component trees')
    tree_parser.add_argument('bundle', help='Path to decoded bundle JSON')
    tree_parser.add_argument('--screen', help='Only print this screen')

    # types command
    types_parser = subparsers.add_parser('types', help='List built-in component types')
    types_parser.add_argument('--catalog', dest='types_catalog', help='Descriptor JSON file to list')

    args = parser.parse_args(argv)
    configure_logging('DEBUG' if args.verbose else 'WARNING', json_logs=args.json_logs)

    options = InspectOptions(
        max_workers=args.workers,
        resolution_timeout=args.timeout,
        catalog_path=args.catalog,
        most_used_limit=getattr(args, 'most_used', 8),
        parallel_screens=bool(args.workers and args.workers > 1),
    )

    try:
        if args.command in ('summary', 'tree'):
            if not os.path.isfile(args.bundle):
                print(f"Error: {args.bundle} not found", file=sys.stderr)
                sys.exit(1)
            project = inspect_bundle(args.bundle, options)

            if args.command == 'summary':
                _print_summary(project, options, args.json)
            else:
                screens = project.screens
                if args.screen:
                    screen = project.get_screen(args.screen)
                    if screen is None:
                        print(f"Error: no screen named {args.screen}", file=sys.stderr)
                        sys.exit(1)
                    screens = [screen]
                for screen in screens:
                    print(f"== {screen.name} ==")
                    _print_tree(screen.form)

        elif args.command == 'types':
            catalog_path = args.types_catalog or args.catalog
            if catalog_path:
                if not os.path.isfile(catalog_path):
                    print(f"Error: {catalog_path} not found", file=sys.stderr)
                    sys.exit(1)
                catalog = CatalogBuilder(FileDescriptorSource(catalog_path)).build()
            else:
                catalog = build_catalog()
            for name in sorted(catalog.short_names()):
                print(f"  {name}")

        else:
            parser.print_help()
    except InspectorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
