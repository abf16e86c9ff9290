"""
Mod Content Cache

Remembers which installed plugin defined each stable type hash, so the
answer is available without re-scanning plugin code every session.
"""

from modcache.core.models import (
    PluginRecord,
    PluginMetadata,
    InstalledPlugin,
)
from modcache.core.registry import Registry, RegistryNotInitialisedError, load_registry
from modcache.host import TypeEnumerator, scan_plugin, load_installed_plugins, load_type_enumerator
from modcache.snapshot import parse_snapshot, load_snapshot_file, save_snapshot_file, dump_snapshot
from modcache.config import Settings, load_settings
from modcache.mod import ContentCacheMod

__all__ = [
    # Models
    "PluginRecord",
    "PluginMetadata",
    "InstalledPlugin",
    # Core
    "Registry",
    "RegistryNotInitialisedError",
    "ContentCacheMod",
    "Settings",
    # Functions
    "load_registry",
    "scan_plugin",
    "load_installed_plugins",
    "load_type_enumerator",
    "parse_snapshot",
    "load_snapshot_file",
    "save_snapshot_file",
    "dump_snapshot",
    "load_settings",
    # Types
    "TypeEnumerator",
]
