"""
Skill catalog built from the community skill database document.

The document is third-party and loosely typed, so filtering is forgiving:
a bad class or skill entry is skipped and logged, and only a document
missing its top-level sections is rejected outright.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .constants import COMBAT_DISCIPLINES
from .errors import MalformedSource
from .models import DatabaseIndex, SkillRecord

logger = logging.getLogger(__name__)

# "deprecated" values that mean the skill is still current
_NOT_DEPRECATED = {"", "0", "false"}


class SkillCatalog:
    """Read-only mapping of class name -> database index -> skill record."""

    def __init__(self, skills_by_class: Dict[str, Dict[DatabaseIndex, SkillRecord]]):
        self._skills = skills_by_class

    def get(self, class_name: str, database_index: DatabaseIndex) -> Optional[SkillRecord]:
        return self._skills.get(class_name, {}).get(database_index)

    def skills_for(self, class_name: str) -> List[SkillRecord]:
        """All records of a class in catalog order (empty for unknown classes)."""
        return list(self._skills.get(class_name, {}).values())

    @property
    def class_names(self) -> List[str]:
        return list(self._skills)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._skills

    def __len__(self) -> int:
        return sum(len(skills) for skills in self._skills.values())


def _as_index(value: Any) -> Optional[DatabaseIndex]:
    """Read a database index from an int or a numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return DatabaseIndex(value)
    if isinstance(value, str):
        try:
            return DatabaseIndex(int(value.strip()))
        except ValueError:
            return None
    return None


def is_deprecated(skill_object: Dict[str, Any]) -> bool:
    """True if the skill's ``deprecated`` field is present and not falsy or zero."""
    value = skill_object.get("deprecated")
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in _NOT_DEPRECATED
    return bool(value)


def _require(document: Dict[str, Any], key: str, expected_type: type, source: str):
    if key not in document:
        raise MalformedSource(source, f"missing top-level key '{key}'")
    value = document[key]
    if not isinstance(value, expected_type):
        raise MalformedSource(source, f"'{key}' should be {expected_type.__name__}, got {type(value).__name__}")
    return value


def _collect_class_skills(class_name: str, class_object: Dict[str, Any],
                          skills: Dict[str, Any]) -> Dict[DatabaseIndex, SkillRecord]:
    class_skills: Dict[DatabaseIndex, SkillRecord] = {}

    # Every list-valued property lists database indices; scalars are metadata
    for property_name, value in class_object.items():
        if not isinstance(value, list):
            continue

        for raw_index in value:
            database_index = _as_index(raw_index)
            if database_index is None:
                logger.warning(f"{class_name}.{property_name}: skipping non-integer index {raw_index!r}")
                continue

            skill_object = skills.get(str(database_index))
            if not isinstance(skill_object, dict):
                logger.warning(f"{class_name}.{property_name}: skill {database_index} not found in skills")
                continue

            if is_deprecated(skill_object):
                logger.debug(f"{class_name}: skipping deprecated skill {database_index}")
                continue

            # First occurrence wins
            if database_index in class_skills:
                logger.debug(f"{class_name}: skill {database_index} listed more than once")
                continue

            class_skills[database_index] = SkillRecord.from_source(database_index, skill_object)

    return class_skills


def parse_skill_database(document: Any, source: str = "skill database") -> Tuple[SkillCatalog, FrozenSet[DatabaseIndex]]:
    """
    Filter the raw database document into a skill catalog and an ignore set.

    Args:
        document: Decoded JSON with ``skills``, ``classes`` and ``misc`` sections
        source: Name used in error messages

    Returns:
        Tuple of (catalog, ignore_set)

    Raises:
        MalformedSource: If the document or one of its sections has the wrong shape
    """
    if not isinstance(document, dict):
        raise MalformedSource(source, f"expected a JSON object, got {type(document).__name__}")

    skills = _require(document, "skills", dict, source)
    classes = _require(document, "classes", dict, source)
    misc = _require(document, "misc", list, source)

    skills_by_class: Dict[str, Dict[DatabaseIndex, SkillRecord]] = {}
    for class_name, class_object in classes.items():
        if not isinstance(class_object, dict):
            logger.warning(f"Skipping class {class_name}: entry is {type(class_object).__name__}, not an object")
            continue

        discipline = class_object.get("discipline")
        if not isinstance(discipline, str):
            logger.warning(f"Skipping class {class_name}: discipline is {type(discipline).__name__}, not a string")
            continue
        if discipline not in COMBAT_DISCIPLINES:
            logger.debug(f"Skipping class {class_name} with discipline {discipline!r}")
            continue

        skills_by_class[class_name] = _collect_class_skills(class_name, class_object, skills)

    ignore_set = set()
    for raw_index in misc:
        database_index = _as_index(raw_index)
        if database_index is None:
            logger.warning(f"misc: skipping non-integer index {raw_index!r}")
            continue
        ignore_set.add(database_index)

    catalog = SkillCatalog(skills_by_class)
    logger.info(
        f"Catalogued {len(catalog)} skills across {len(catalog.class_names)} classes, "
        f"{len(ignore_set)} ignored indices"
    )
    return catalog, frozenset(ignore_set)
