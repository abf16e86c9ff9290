"""
Host Adapter - The Seam to the Host Application

The registry never enumerates types itself. The host supplies the list of
installed plugins and a type enumerator; this module scans one plugin with
that enumerator and, for standalone use, loads both from configuration.
"""

import importlib
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Tuple

import yaml

from modcache.core.models import InstalledPlugin, PluginRecord

logger = logging.getLogger(__name__)

# Given a plugin's compiled-code handle, yield (stable_type_hash, type_name).
TypeEnumerator = Callable[[Any], Iterable[Tuple[int, str]]]


def scan_plugin(plugin: InstalledPlugin, enumerate_types: TypeEnumerator) -> PluginRecord:
    """
    Build a PluginRecord from the types the plugin's own code defines.

    A failing enumerator is logged and yields a record without contributions,
    so one broken plugin never aborts the whole scan.
    """
    record = PluginRecord(name=plugin.name, id=plugin.id)
    try:
        contributions = {}
        for type_hash, type_name in enumerate_types(plugin.handle):
            contributions[type_hash] = type_name
        record.contributions = contributions
    except Exception as e:
        logger.error(
            "Failed to populate type hashes for %s (%s): %s",
            plugin.name or "Unknown", plugin.id, e, exc_info=True
        )
    return record


def load_installed_plugins(file_path: str) -> List[InstalledPlugin]:
    """
    Read a YAML manifest describing installed plugins.

    Expected layout::

        plugins:
          - id: 42
            name: Foo
            handle: foo_mod.types

    Raises:
        ValueError: If the file is missing, is not valid YAML, or has no
            ``plugins`` list
        ValidationError: If an entry doesn't match InstalledPlugin
    """
    path = Path(file_path)
    if not path.exists():
        raise ValueError(f"Plugin manifest not found: {file_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {file_path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("plugins"), list):
        raise ValueError(f"Plugin manifest {file_path} has no 'plugins' list")

    return [InstalledPlugin(**entry) for entry in data["plugins"]]


def load_type_enumerator(target: str) -> TypeEnumerator:
    """
    Import a type enumerator given as ``package.module:attribute``.

    Raises:
        ValueError: If the target is malformed, cannot be imported, or is not callable
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected 'module:attribute', got '{target}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Failed to import type enumerator module '{module_name}': {e}")

    enumerator = getattr(module, attr, None)
    if not callable(enumerator):
        raise ValueError(f"'{target}' is not a callable type enumerator")
    return enumerator
