"""
Value types shared by the loaders and the query facade.

Game indices and database indices are both plain integers on the wire but
live in different identifier spaces. They are kept apart with ``NewType``
and only meet in the adjustment table.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NewType, Optional

GameIndex = NewType("GameIndex", int)
DatabaseIndex = NewType("DatabaseIndex", int)


@dataclass(frozen=True)
class SkillRecord:
    """
    One action as catalogued by the external skill database.

    Only ``database_index`` and ``name`` take part in equality; everything
    else the source object carried is kept read-only in ``fields``.
    """
    database_index: DatabaseIndex
    name: str
    fields: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_source(cls, database_index: DatabaseIndex, skill_object: Dict[str, Any]) -> "SkillRecord":
        """Build a record from a ``skills`` entry of the database document."""
        name = skill_object.get("name")
        return cls(
            database_index=database_index,
            name=str(name) if name is not None else "",
            fields=skill_object,
        )

    @property
    def icon(self) -> Optional[str]:
        return self.fields.get("icon")

    @property
    def cooldown(self) -> Optional[Any]:
        return self.fields.get("cooldown")

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.fields)
        data["id"] = self.database_index
        data["name"] = self.name
        return data


@dataclass(frozen=True)
class AdjustmentEntry:
    """One row of the adjustment table. The action name is not kept."""
    class_name: str
    game_index: GameIndex
    database_index: DatabaseIndex


@dataclass
class RotationData:
    """An observed or authored rotation to resolve into skill records."""
    class_name: Optional[str] = None
    sequence: Optional[List[DatabaseIndex]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RotationData":
        """Accept the ``{"class": ..., "sequence": [...]}`` shape rotation tools share."""
        class_name = data.get("class", data.get("class_name"))
        sequence = data.get("sequence")
        return cls(
            class_name=class_name,
            sequence=[DatabaseIndex(int(idx)) for idx in sequence] if sequence is not None else None,
        )
