"""
Registry - Which plugin defined this type?

Merges plugin records from three ordered sources into one in-memory index,
saves the merged result, and answers lookups by stable type hash.

Sources, in merge order:
- A: live scan of the installed plugins
- B: the snapshot bundled with the package
- C: the snapshot saved by the previous run

Later sources win per type hash, so a saved snapshot can overwrite entries
a live scan just produced.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from modcache.core.models import InstalledPlugin, PluginMetadata, PluginRecord
from modcache.host import TypeEnumerator, scan_plugin
from modcache.snapshot import (
    SAVE_FILE_NAME, load_preload_snapshot, load_snapshot_file, save_snapshot_file
)

logger = logging.getLogger(__name__)

PluginSource = Union[Iterable[InstalledPlugin], Callable[[], Iterable[InstalledPlugin]]]


class RegistryNotInitialisedError(RuntimeError):
    """Raised when the registry is queried before initialise() has completed."""


class Registry:
    def __init__(
        self,
        storage_dir: Union[str, Path],
        installed_plugins: PluginSource = (),
        enumerate_types: Optional[TypeEnumerator] = None,
        preload_loader: Callable[[], Dict[int, PluginRecord]] = load_preload_snapshot,
        save_file_name: str = SAVE_FILE_NAME,
    ):
        """
        Args:
            storage_dir: Directory holding the saved snapshot, created on demand
            installed_plugins: Plugins reported by the host, or a callable returning them
            enumerate_types: Host capability listing the types a plugin handle defines
            preload_loader: Returns the bundled snapshot
            save_file_name: File name of the saved snapshot inside storage_dir
        """
        self.storage_dir = Path(storage_dir)
        self._installed_plugins = installed_plugins
        self._enumerate_types = enumerate_types
        self._preload_loader = preload_loader
        self._save_file_name = save_file_name
        self._plugins: Dict[int, PluginRecord] = {}
        self._initialised = False

    @property
    def save_path(self) -> Path:
        return self.storage_dir / self._save_file_name

    @property
    def is_initialised(self) -> bool:
        return self._initialised

    def initialise(self) -> "Registry":
        """
        Rebuild the index from all sources and save the merged result.

        Source failures are logged and the source is treated as empty.
        Failing to write the saved snapshot is not caught.
        """
        self._initialised = False
        self._plugins.clear()

        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self._add_records(self._scan_installed_plugins())

        preload = self._read_preload()
        if preload is not None:
            self._add_records(preload.values())

        saved = self._read_saved()
        if saved is not None:
            self._add_records(saved.values())

        with_content = {
            plugin_id: record
            for plugin_id, record in self._plugins.items()
            if record.has_content
        }
        save_snapshot_file(with_content, self.save_path)
        logger.info(
            "Cached %d plugin(s), %d with type hashes (%d hashes), saved to %s",
            len(self._plugins), len(with_content),
            sum(record.contribution_count for record in with_content.values()),
            self.save_path
        )

        self._initialised = True
        return self

    def _scan_installed_plugins(self) -> Iterator[PluginRecord]:
        plugins = self._installed_plugins
        if callable(plugins):
            plugins = plugins()

        for plugin in plugins:
            if plugin.id == 0:
                continue
            if self._enumerate_types is None:
                yield PluginRecord(name=plugin.name, id=plugin.id)
            else:
                yield scan_plugin(plugin, self._enumerate_types)

    def _read_preload(self) -> Optional[Dict[int, PluginRecord]]:
        try:
            return self._preload_loader()
        except Exception as e:
            logger.error("Failed to load preload snapshot: %s", e, exc_info=True)
            return None

    def _read_saved(self) -> Optional[Dict[int, PluginRecord]]:
        path = self.save_path
        if not path.exists():
            logger.warning("Skipping load from %s. File does not exist.", path)
            return None

        try:
            records = load_snapshot_file(path)
        except Exception as e:
            logger.error("Failed to load %s: %s", path, e, exc_info=True)
            return None

        logger.info("Load from %s.", path)
        return records

    def _add_records(self, records: Iterable[PluginRecord]):
        for record in records:
            existing = self._plugins.get(record.id)
            if existing is None:
                self._plugins[record.id] = record
                continue
            existing.merge_with(record)

    def _require_initialised(self):
        if not self._initialised:
            raise RegistryNotInitialisedError(
                "Registry has not been initialised; call initialise() before querying it"
            )

    # --- Queries ---

    def find_source_of(self, type_hash: int) -> Tuple[bool, Optional[PluginMetadata]]:
        """Return the first plugin that contributes ``type_hash``."""
        self._require_initialised()
        for record in self._plugins.values():
            if record.is_source_of(type_hash):
                return True, record.metadata()
        return False, None

    def find_sources_of(
        self, type_hashes: Iterable[int]
    ) -> Tuple[bool, Optional[Iterator[PluginMetadata]]]:
        """
        Return every plugin that contributes at least one of ``type_hashes``.

        The metadata comes back as a one-shot iterator.
        """
        self._require_initialised()
        wanted = frozenset(type_hashes)
        if not wanted:
            logger.warning("\tNo hashes")
            return False, None

        matches = [record for record in self._plugins.values() if record.is_source_of_any(wanted)]
        if not matches:
            logger.warning("\tNo mod infos found")
            return False, None

        return True, (record.metadata() for record in matches)

    def name_of(self, plugin_id: int) -> str:
        self._require_initialised()
        record = self._plugins.get(plugin_id)
        return record.name if record is not None else f"Unknown ({plugin_id})"

    def __len__(self) -> int:
        self._require_initialised()
        return len(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        self._require_initialised()
        return plugin_id in self._plugins


def load_registry(
    storage_dir: Union[str, Path],
    installed_plugins: PluginSource = (),
    enumerate_types: Optional[TypeEnumerator] = None,
    **kwargs,
) -> Registry:
    """Construct a Registry and initialise it in one step."""
    return Registry(storage_dir, installed_plugins, enumerate_types, **kwargs).initialise()
