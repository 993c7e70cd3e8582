"""
Adjustment table: reconciles game indices with database indices.

The table is a local CSV file with one row per (class, game index, database
index) mapping. One game index may map to several database indices, for
example when the database lists upgraded versions of an action separately.
"""

import asyncio
import io
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

import pandas as pd

from .constants import (
    ADJUSTMENT_COLUMNS,
    CLASS_NAME_COLUMN,
    GAME_INDEX_COLUMN,
    DATABASE_INDEX_COLUMN,
)
from .errors import SourceUnavailable, MalformedSource
from .models import AdjustmentEntry, GameIndex, DatabaseIndex

logger = logging.getLogger(__name__)


def _parse_index(value: str, column: str, row_number: int, source: str) -> int:
    try:
        return int(value.strip())
    except ValueError as e:
        raise MalformedSource(source, f"row {row_number}: {column} {value!r} is not an integer") from e


def parse_adjustment_table(content: str, source: str = "adjustment table") -> List[AdjustmentEntry]:
    """
    Parse adjustment table CSV content into entries.

    Args:
        content: CSV text with a ClassName, ActionName, GameIdx, DBIdx header
        source: Name used in error messages

    Returns:
        List of entries in file order

    Raises:
        MalformedSource: If the header is missing a column or any row cannot be parsed.
            Nothing is returned for a partially valid table.
    """
    try:
        df = pd.read_csv(
            io.StringIO(content),
            sep=",",
            quotechar='"',
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise MalformedSource(source, "no header row") from e
    except pd.errors.ParserError as e:
        raise MalformedSource(source, f"unreadable CSV: {e}") from e

    # Header read as a data row so a row wider than the header is a parse
    # error instead of being shifted into an implicit index column
    df = df.fillna("")
    header = [str(column).strip().lstrip("\ufeff") for column in df.iloc[0]]
    df = df.iloc[1:]
    df.columns = header
    missing = [column for column in ADJUSTMENT_COLUMNS if column not in df.columns]
    if missing:
        raise MalformedSource(source, f"missing column(s): {', '.join(missing)}")

    entries = []
    for row_number, (class_name, game_idx, db_idx) in enumerate(
            zip(df[CLASS_NAME_COLUMN], df[GAME_INDEX_COLUMN], df[DATABASE_INDEX_COLUMN]), start=1):
        class_name = class_name.strip()
        if not class_name:
            raise MalformedSource(source, f"row {row_number}: empty {CLASS_NAME_COLUMN}")

        entries.append(AdjustmentEntry(
            class_name=class_name,
            game_index=GameIndex(_parse_index(game_idx, GAME_INDEX_COLUMN, row_number, source)),
            database_index=DatabaseIndex(_parse_index(db_idx, DATABASE_INDEX_COLUMN, row_number, source)),
        ))

    return entries


class AdjustmentTable:
    """
    Read-only index of class -> game index -> database indices.

    Lists keep file order and may contain duplicates; only membership is
    meaningful.
    """

    def __init__(self, table: Dict[str, Dict[GameIndex, Tuple[DatabaseIndex, ...]]], row_count: int = 0):
        self._table = table
        self._row_count = row_count

    @classmethod
    def build(cls, entries: Iterable[AdjustmentEntry]) -> "AdjustmentTable":
        """Build a table from parsed entries."""
        # Structure: {class_name: {game_index: [database_index, ...]}}
        table = defaultdict(lambda: defaultdict(list))
        row_count = 0
        for entry in entries:
            table[entry.class_name][entry.game_index].append(entry.database_index)
            row_count += 1

        frozen = {
            class_name: {game_index: tuple(indices) for game_index, indices in by_game_index.items()}
            for class_name, by_game_index in table.items()
        }
        return cls(frozen, row_count)

    def contains(self, class_name: str, game_index: GameIndex, database_index: DatabaseIndex) -> bool:
        """True if the table maps this class's game index to the database index."""
        return database_index in self.database_indices(class_name, game_index)

    def database_indices(self, class_name: str, game_index: GameIndex) -> Tuple[DatabaseIndex, ...]:
        return self._table.get(class_name, {}).get(game_index, ())

    @property
    def class_names(self) -> List[str]:
        return list(self._table)

    def __len__(self) -> int:
        return self._row_count


async def load_adjustment_table(path: Union[str, Path]) -> AdjustmentTable:
    """
    Read and parse the adjustment table file without blocking the event loop.

    Raises:
        SourceUnavailable: If the file cannot be read
        MalformedSource: If any row cannot be parsed
    """
    path = Path(path)
    try:
        # utf-8-sig drops the byte order mark spreadsheet tools like to add
        content = await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedSource(str(path), f"not UTF-8 text: {e}") from e
    except (IOError, OSError) as e:
        raise SourceUnavailable(str(path), str(e)) from e

    entries = await asyncio.to_thread(parse_adjustment_table, content, str(path))
    table = AdjustmentTable.build(entries)
    logger.info(f"Loaded {len(table)} adjustment rows for {len(table.class_names)} classes from {path}")
    return table
