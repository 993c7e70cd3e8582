#!/usr/bin/env python3
"""
Example usage of the rotation skill database.
"""

import asyncio
import logging
import sys

from rotationdb import RotationDatabase, RotationData, DatabaseIndex, GameIndex, SkillDatabaseError


async def main(action_table_path: str):
    # Set up logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    database = RotationDatabase(action_table_path=action_table_path)

    print("Loading skill database...")
    try:
        await database.load()
    except SkillDatabaseError as e:
        print(f"Error loading skill database: {e}")
        return 1

    # Example: resolve a short rotation
    rotation = RotationData(class_name="Warrior", sequence=[DatabaseIndex(501), DatabaseIndex(502)])
    skills = database.resolve_sequence(rotation)
    print(f"Resolved {len(skills)} of {len(rotation.sequence)} skills:")
    for skill in skills:
        print(f"  - {skill.name} (ID: {skill.database_index})")

    # Example: match a game client action against a database skill
    same = database.is_same_action("Warrior", GameIndex(12), DatabaseIndex(501))
    print(f"\nGame action 12 is database skill 501: {same}")

    print(f"Skill 777 is ignored: {database.is_ignored(DatabaseIndex(777))}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "ActionTable.csv")))
