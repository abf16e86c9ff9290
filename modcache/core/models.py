"""
Mod Content Cache Pydantic Models

Defines the records the registry keeps per plugin and the lightweight
metadata handed out to callers.
"""

from typing import Annotated, Dict, Any, Iterable
from pydantic import BaseModel, Field, ConfigDict


UINT64_MAX = 2**64 - 1

# Plugin ids and stable type hashes are unsigned 64-bit integers.
UInt64 = Annotated[int, Field(ge=0, le=UINT64_MAX)]


# --- Query Results ---

class PluginMetadata(BaseModel):
    """Name and id of the plugin that contributed a type."""
    name: str = Field(..., description="Display name of the plugin")
    id: UInt64 = Field(..., description="Unique plugin id")

    model_config = ConfigDict(frozen=True)


# --- Host Inputs ---

class InstalledPlugin(BaseModel):
    """A plugin as reported by the host's plugin loader."""
    id: UInt64 = Field(..., description="Unique plugin id (0 is reserved)")
    name: str = Field(..., description="Display name of the plugin")
    handle: Any = Field(None, description="Opaque compiled-code handle passed to the type enumerator")

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)


# --- Registry Entries ---

class PluginRecord(BaseModel):
    """
    Everything the registry knows about one plugin.

    Serialized with the field names of the persisted snapshot format
    (``Name``, ``ID``, ``UnityTypeHashes``).
    """
    name: str = Field("Unknown", alias="Name", description="Display name of the plugin")
    id: UInt64 = Field(0, alias="ID", description="Unique plugin id (0 is reserved)")
    contributions: Dict[UInt64, str] = Field(
        default_factory=dict,
        alias="UnityTypeHashes",
        description="Stable type hash -> type name for every type the plugin defines",
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def contribution_count(self) -> int:
        return len(self.contributions)

    @property
    def has_content(self) -> bool:
        return bool(self.contributions)

    def merge_with(self, other: "PluginRecord") -> "PluginRecord":
        """Copy every contribution of ``other`` into this record, overwriting on collision."""
        for type_hash, type_name in other.contributions.items():
            self.contributions[type_hash] = type_name
        return self

    def is_source_of(self, type_hash: int) -> bool:
        return type_hash in self.contributions

    def is_source_of_any(self, type_hashes: Iterable[int]) -> bool:
        return any(type_hash in self.contributions for type_hash in type_hashes)

    def metadata(self) -> PluginMetadata:
        return PluginMetadata(name=self.name, id=self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PluginRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
