"""
Query facade over the loaded skill data.

``SkillDatabase`` is an immutable snapshot of the adjustment table, the
skill catalog and the ignore set. ``RotationDatabase`` owns the load
sequence and swaps a snapshot in once both loaders have finished; until
then every query returns an empty or false answer.
"""

import asyncio
import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Union

import httpx

from . import POINTER_URL, ACTION_TABLE_PATH, TIMEOUT
from .adjustment_table import AdjustmentTable, load_adjustment_table
from .api import fetch_skill_database
from .errors import NotReady
from .models import DatabaseIndex, GameIndex, RotationData, SkillRecord
from .skill_catalog import SkillCatalog, parse_skill_database


class SkillDatabase:
    """
    Immutable snapshot of everything the loaders produced.
    """

    def __init__(self, adjustment_table: AdjustmentTable, catalog: SkillCatalog,
                 ignore_set: FrozenSet[DatabaseIndex]):
        self.adjustment_table = adjustment_table
        self.catalog = catalog
        self.ignore_set = frozenset(ignore_set)

    def resolve_sequence(self, rotation: RotationData) -> List[SkillRecord]:
        """
        Resolve a rotation's database indices into skill records.

        Indices missing from the class's catalog are dropped, so the result
        keeps input order but may be shorter than the input.
        """
        if not rotation.class_name or rotation.class_name not in self.catalog or not rotation.sequence:
            return []

        records = []
        for database_index in rotation.sequence:
            record = self.catalog.get(rotation.class_name, database_index)
            if record is not None:
                records.append(record)
        return records

    def is_same_action(self, class_name: str, game_index: GameIndex, database_index: DatabaseIndex) -> bool:
        return self.adjustment_table.contains(class_name, game_index, database_index)

    def is_ignored(self, database_index: DatabaseIndex) -> bool:
        return database_index in self.ignore_set

    def find(self, action_name: str) -> List[SkillRecord]:
        """Debug lookup by name, ignoring case and spaces, across all classes."""
        wanted = action_name.replace(" ", "").lower()
        return [
            record
            for class_name in self.catalog.class_names
            for record in self.catalog.skills_for(class_name)
            if record.name.replace(" ", "").lower() == wanted
        ]


class RotationDatabase:
    """
    Loads the skill data once and answers rotation queries.

    Create one at startup, ``await load()`` and pass the instance to whatever
    needs lookups. Queries made before loading completes return empty or
    false results; use ``snapshot`` to fail loudly instead.
    """

    def __init__(self, action_table_path: Optional[Union[str, Path]] = None,
                 pointer_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the database.

        Args:
            action_table_path: Local adjustment table CSV (uses module default if None)
            pointer_url: URL of the file naming the database URL (uses module default if None)
            timeout: Timeout in seconds for each network fetch (uses module default if None)
            http_client: Optional client to fetch with; a temporary one is opened otherwise
        """
        self.action_table_path = Path(action_table_path or ACTION_TABLE_PATH)
        self.pointer_url = pointer_url or POINTER_URL
        self.timeout = TIMEOUT if timeout is None else timeout
        self.http_client = http_client
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._snapshot: Optional[SkillDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> SkillDatabase:
        """The loaded data. Raises NotReady before loading completes."""
        if self._snapshot is None:
            raise NotReady()
        return self._snapshot

    async def load(self) -> SkillDatabase:
        """
        Run both loaders and publish the result.

        The adjustment table and the remote database are loaded concurrently.
        If either fails its error is raised here, nothing is published and
        ``load`` may be called again. Once loaded, later calls return the
        same snapshot without fetching.

        Raises:
            SourceUnavailable: If a source cannot be read or fetched
            MalformedSource: If a source cannot be parsed
        """
        async with self._lock:
            if self._snapshot is not None:
                return self._snapshot

            self.logger.info("Loading skill database...")
            results = await asyncio.gather(
                load_adjustment_table(self.action_table_path),
                self._load_catalog(),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    self.logger.error(f"Skill database load failed: {result}")
                    raise result

            adjustment_table, (catalog, ignore_set) = results
            self._snapshot = SkillDatabase(adjustment_table, catalog, ignore_set)
            self.logger.info("Skill database ready")
            return self._snapshot

    async def _load_catalog(self):
        if self.http_client is not None:
            document = await fetch_skill_database(self.http_client, self.pointer_url, self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                document = await fetch_skill_database(client, self.pointer_url)
        return parse_skill_database(document)

    def resolve_sequence(self, rotation: RotationData) -> List[SkillRecord]:
        if self._snapshot is None:
            return []
        return self._snapshot.resolve_sequence(rotation)

    def is_same_action(self, class_name: str, game_index: GameIndex, database_index: DatabaseIndex) -> bool:
        if self._snapshot is None:
            return False
        return self._snapshot.is_same_action(class_name, game_index, database_index)

    def is_ignored(self, database_index: DatabaseIndex) -> bool:
        if self._snapshot is None:
            return False
        return self._snapshot.is_ignored(database_index)

    def find(self, action_name: str) -> List[SkillRecord]:
        if self._snapshot is None:
            return []
        return self._snapshot.find(action_name)
