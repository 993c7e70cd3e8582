# Discipline tags used by the skill database for each class entry.
# Crafting and gathering classes carry other tags and never show up in
# combat rotations.
WAR = "war"
MAGIC = "magic"

COMBAT_DISCIPLINES = frozenset({WAR, MAGIC})
