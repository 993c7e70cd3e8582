from .disciplines import COMBAT_DISCIPLINES

DEFAULT_POINTER_URL = "https://raw.githubusercontent.com/Elysia-ff/FFXIV_RotationHelper-resources/master/Output/dburl.txt"
DEFAULT_ACTION_TABLE = "ActionTable.csv"
DEFAULT_TIMEOUT = 20.0

# Adjustment table header
CLASS_NAME_COLUMN = "ClassName"
ACTION_NAME_COLUMN = "ActionName"
GAME_INDEX_COLUMN = "GameIdx"
DATABASE_INDEX_COLUMN = "DBIdx"
ADJUSTMENT_COLUMNS = [CLASS_NAME_COLUMN, ACTION_NAME_COLUMN, GAME_INDEX_COLUMN, DATABASE_INDEX_COLUMN]
