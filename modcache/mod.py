"""
Mod Entry Point - Host Lifecycle Hooks

The host calls these hooks while loading plugins. ``pre_inject`` builds the
registry; consumers receive it through ``ContentCacheMod.registry``.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from modcache.config import Settings
from modcache.core.registry import PluginSource, Registry
from modcache.host import TypeEnumerator

logger = logging.getLogger(__name__)

MOD_NAME = "Mod Content Cache"
MOD_GUID = f"IcedMilo.PlateUp.{MOD_NAME}"
MOD_VERSION = "0.1.0"

FOLDER_NAME = "ModContentCache"


class ContentCacheMod:
    def __init__(
        self,
        settings: Settings,
        installed_plugins: PluginSource = (),
        enumerate_types: Optional[TypeEnumerator] = None,
    ):
        self.settings = settings
        self._installed_plugins = installed_plugins
        self._enumerate_types = enumerate_types
        self.registry: Optional[Registry] = None

    @property
    def folder_path(self) -> Path:
        return self.settings.data_dir / FOLDER_NAME

    def post_activate(self, plugin: Any = None):
        logger.warning("%s v%s in use!", MOD_GUID, MOD_VERSION)

    def pre_inject(self) -> Registry:
        self.registry = Registry(
            self.folder_path,
            installed_plugins=self._installed_plugins,
            enumerate_types=self._enumerate_types,
        ).initialise()
        return self.registry

    def post_inject(self):
        pass
