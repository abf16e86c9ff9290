"""
Mod Content Cache CLI

Rebuilds the cache outside the host and answers lookups against it.
"""

import argparse
import sys
from typing import List, Optional

from modcache.config import configure_logging, load_settings
from modcache.host import load_installed_plugins, load_type_enumerator
from modcache.mod import ContentCacheMod


def _parse_uint(value: str) -> int:
    # Accept decimal or 0x-prefixed hashes
    try:
        number = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modcache", description="Mod Content Cache")
    parser.add_argument("--data-dir", help="Host data directory (overrides MODCACHE_DATA_DIR)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    refresh = subparsers.add_parser("refresh", help="Scan installed plugins and rebuild the cache")
    refresh.add_argument("--plugins", required=True, help="YAML manifest of installed plugins")
    refresh.add_argument("--enumerator", required=True, help="Type enumerator as 'module:attribute'")

    lookup = subparsers.add_parser("lookup", help="Find the plugin(s) that define the given type hashes")
    lookup.add_argument("hashes", nargs="+", type=_parse_uint, help="Stable type hashes")

    name = subparsers.add_parser("name", help="Show the name of a plugin id")
    name.add_argument("plugin_id", type=_parse_uint, help="Plugin id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.data_dir)
    configure_logging(settings.log_level)

    try:
        if args.command == "refresh":
            mod = ContentCacheMod(
                settings,
                installed_plugins=load_installed_plugins(args.plugins),
                enumerate_types=load_type_enumerator(args.enumerator),
            )
        else:
            mod = ContentCacheMod(settings)
        registry = mod.pre_inject()
    except Exception as e:
        print(f"Error: {e}")
        return 1

    if args.command == "refresh":
        print(f"Cached {len(registry)} plugin(s) in {registry.save_path}")
        return 0

    if args.command == "name":
        print(registry.name_of(args.plugin_id))
        return 0

    if len(args.hashes) == 1:
        found, metadata = registry.find_source_of(args.hashes[0])
        if not found:
            print(f"No plugin defines {args.hashes[0]}")
            return 1
        print(f"{metadata.name} ({metadata.id})")
        return 0

    found, metadatas = registry.find_sources_of(args.hashes)
    if not found:
        print("No plugin defines any of the given hashes")
        return 1
    for metadata in metadatas:
        print(f"{metadata.name} ({metadata.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
