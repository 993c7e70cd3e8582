import asyncio
import logging
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from rotationdb import RotationDatabase, RotationData, DatabaseIndex, GameIndex

logger = logging.getLogger(__name__)

database = RotationDatabase()

# Initialize FastMCP server
mcp = FastMCP("rotationdb")


@mcp.tool()
def is_ready() -> bool:
    """Check whether the skill database has finished loading."""
    return database.is_ready


@mcp.tool()
def resolve_sequence(class_name: str, sequence: List[int]) -> List[Dict[str, Any]]:
    """
    Resolve a rotation into skill records.

    Args:
        class_name: Class the rotation belongs to, as named in the skill database
        sequence: Database indices in rotation order

    Returns:
        Skill records for the indices known to that class, in input order.
        Unknown indices are left out.
    """
    rotation = RotationData(class_name=class_name, sequence=[DatabaseIndex(idx) for idx in sequence])
    return [record.to_dict() for record in database.resolve_sequence(rotation)]


@mcp.tool()
def is_same_action(class_name: str, game_index: int, database_index: int) -> bool:
    """
    Check whether a game index and a database index refer to the same action for a class.

    Args:
        class_name: Class name as used in the adjustment table
        game_index: Action id reported by the game client
        database_index: Skill id from the skill database
    """
    return database.is_same_action(class_name, GameIndex(game_index), DatabaseIndex(database_index))


@mcp.tool()
def is_ignored(database_index: int) -> bool:
    """Check whether a database index is excluded from rotations (potions, items and the like)."""
    return database.is_ignored(DatabaseIndex(database_index))


@mcp.tool()
def find_skill(action_name: str) -> List[Dict[str, Any]]:
    """
    Find skills by name across all classes. Case and spaces are ignored.

    Args:
        action_name: Skill name, e.g. "Heavy Swing"
    """
    return [record.to_dict() for record in database.find(action_name)]


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        asyncio.run(database.load())
    except Exception as e:
        logger.error(f"Error loading skill database: {e}")
        raise e

    logger.info("Starting MCP server...")
    mcp.run(transport='stdio')


if __name__ == "__main__":
    main()
