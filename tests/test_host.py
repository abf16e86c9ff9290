"""Tests for the host adapter module."""

import json
import logging
import pytest

from modcache.core.models import InstalledPlugin
from modcache.host import scan_plugin, load_installed_plugins, load_type_enumerator


class TestScanPlugin:
    def test_records_enumerated_types(self, fake_host):
        plugin = InstalledPlugin(id=7, name="Bar", handle="bar.dll")

        record = scan_plugin(plugin, fake_host)

        assert record.id == 7
        assert record.name == "Bar"
        assert record.contributions == {200: "Gadget", 201: "Gizmo"}

    def test_enumerator_failure_yields_empty_record(self, caplog):
        def broken(handle):
            raise RuntimeError("type load failed")

        plugin = InstalledPlugin(id=42, name="Foo", handle="foo.dll")
        with caplog.at_level(logging.ERROR):
            record = scan_plugin(plugin, broken)

        assert record.id == 42
        assert record.name == "Foo"
        assert record.contributions == {}
        assert "Failed to populate type hashes for Foo (42)" in caplog.text

    def test_failure_midway_discards_partial_results(self):
        def partial(handle):
            yield 1, "First"
            raise RuntimeError("boom")

        record = scan_plugin(InstalledPlugin(id=1, name="P", handle=None), partial)

        assert record.contributions == {}


PLUGINS_YAML = """
plugins:
  - id: 42
    name: Foo
    handle: foo.dll
  - id: 7
    name: Bar
"""


class TestLoadInstalledPlugins:
    def test_loads_manifest(self, tmp_path):
        path = tmp_path / "plugins.yaml"
        path.write_text(PLUGINS_YAML)

        plugins = load_installed_plugins(str(path))

        assert [p.id for p in plugins] == [42, 7]
        assert plugins[0].handle == "foo.dll"
        assert plugins[1].handle is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="Plugin manifest not found"):
            load_installed_plugins(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "plugins.yaml"
        path.write_text("plugins: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_installed_plugins(str(path))

    def test_missing_plugins_list(self, tmp_path):
        path = tmp_path / "plugins.yaml"
        path.write_text("other: 1\n")

        with pytest.raises(ValueError, match="no 'plugins' list"):
            load_installed_plugins(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "plugins.yaml"
        path.write_text("")

        with pytest.raises(ValueError):
            load_installed_plugins(str(path))


class TestLoadTypeEnumerator:
    def test_imports_callable(self):
        assert load_type_enumerator("json:dumps") is json.dumps

    def test_requires_colon(self):
        with pytest.raises(ValueError, match="module:attribute"):
            load_type_enumerator("json.dumps")

    def test_unknown_module(self):
        with pytest.raises(ValueError, match="Failed to import"):
            load_type_enumerator("no_such_module_for_modcache:enumerate")

    def test_not_callable(self):
        with pytest.raises(ValueError, match="not a callable"):
            load_type_enumerator("json:__name__")
