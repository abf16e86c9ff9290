import sys
import os

import pytest

# Add the project root directory to sys.path to allow imports from 'modcache'
# This mimics setting PYTHONPATH=. when running from the project root
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from modcache.core.models import InstalledPlugin  # noqa: E402


class FakeHost:
    """Type enumerator keyed by plugin handle; raises for handles listed in ``broken``."""

    def __init__(self, types_by_handle=None, broken=()):
        self.types_by_handle = types_by_handle or {}
        self.broken = set(broken)
        self.calls = []

    def __call__(self, handle):
        self.calls.append(handle)
        if handle in self.broken:
            raise RuntimeError(f"cannot load types from {handle}")
        return list(self.types_by_handle.get(handle, {}).items())


@pytest.fixture
def fake_host():
    return FakeHost(
        types_by_handle={
            "foo.dll": {100: "Widget"},
            "bar.dll": {200: "Gadget", 201: "Gizmo"},
        }
    )


@pytest.fixture
def installed_plugins():
    return [
        InstalledPlugin(id=42, name="Foo", handle="foo.dll"),
        InstalledPlugin(id=7, name="Bar", handle="bar.dll"),
    ]
