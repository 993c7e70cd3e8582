"""
Rotation skill database

A Python package for loading and querying the skill reference data used by
rotation-tracking tools.
"""

import os

__version__ = '0.1.0'

from .constants import DEFAULT_POINTER_URL, DEFAULT_ACTION_TABLE, DEFAULT_TIMEOUT

# Defaults from environment variables
POINTER_URL = os.getenv("ROTATIONDB_POINTER_URL", DEFAULT_POINTER_URL)
ACTION_TABLE_PATH = os.getenv("ROTATIONDB_ACTION_TABLE", DEFAULT_ACTION_TABLE)
TIMEOUT = float(os.getenv("ROTATIONDB_TIMEOUT", DEFAULT_TIMEOUT))

# Import main classes for easier access
from .errors import SkillDatabaseError, SourceUnavailable, MalformedSource, NotReady
from .models import GameIndex, DatabaseIndex, SkillRecord, RotationData, AdjustmentEntry
from .adjustment_table import AdjustmentTable, parse_adjustment_table, load_adjustment_table
from .skill_catalog import SkillCatalog, parse_skill_database
from .database import SkillDatabase, RotationDatabase
