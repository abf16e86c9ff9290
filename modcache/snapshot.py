"""
Snapshot I/O - Reading and Writing Registry Snapshots

A snapshot is a JSON object mapping plugin id (as a string key) to a
PluginRecord. The same format is used for the bundled preload resource and
for the file the registry saves after every initialisation.
"""

import json
import os
from importlib.resources import files
from pathlib import Path
from typing import Dict, Mapping

from pydantic import TypeAdapter

from modcache.core.models import PluginRecord, UInt64

PRELOAD_PACKAGE = "modcache.preloads"
PRELOAD_FILE_NAME = "ModInfoRegistry_Preload.json"
SAVE_FILE_NAME = "ModInfoRegistry.json"

_snapshot_adapter = TypeAdapter(Dict[UInt64, PluginRecord])


def parse_snapshot(data: str) -> Dict[int, PluginRecord]:
    """
    Parse snapshot JSON text into plugin id -> PluginRecord.

    Args:
        data: Raw JSON text

    Returns:
        Mapping of plugin id to record

    Raises:
        ValueError: If the text is not valid JSON, is not an object, or a
            record fails validation (pydantic's ValidationError is a ValueError)
    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid snapshot JSON: {e}")

    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot must be a JSON object, got {type(raw).__name__}")

    return _snapshot_adapter.validate_python(raw)


def load_snapshot_file(path: Path) -> Dict[int, PluginRecord]:
    """
    Load a snapshot from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return parse_snapshot(f.read())


def load_preload_snapshot() -> Dict[int, PluginRecord]:
    """Load the snapshot bundled with the package."""
    data = files(PRELOAD_PACKAGE).joinpath(PRELOAD_FILE_NAME).read_text(encoding='utf-8')
    return parse_snapshot(data)


def dump_snapshot(records: Mapping[int, PluginRecord]) -> str:
    """
    Serialize records to indented JSON.

    Plugin ids and type hashes are emitted in ascending order so that the
    same records always produce the same text.
    """
    payload = {}
    for plugin_id in sorted(records):
        record = records[plugin_id]
        payload[str(plugin_id)] = {
            "Name": record.name,
            "ID": record.id,
            "UnityTypeHashes": {
                str(type_hash): record.contributions[type_hash]
                for type_hash in sorted(record.contributions)
            },
        }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def save_snapshot_file(records: Mapping[int, PluginRecord], path: Path) -> Path:
    """
    Overwrite ``path`` with the serialized records.

    The text goes to a sibling temporary file first and is then moved over
    ``path``, so readers never see a half-written snapshot. I/O errors propagate.
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(dump_snapshot(records))
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path
