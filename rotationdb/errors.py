"""
Exceptions raised while loading the skill database.
"""


class SkillDatabaseError(Exception):
    """Base class for all load and query errors."""


class SourceUnavailable(SkillDatabaseError):
    """A source could not be fetched or read, or came back empty."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} is unavailable: {reason}")


class MalformedSource(SkillDatabaseError):
    """A source was fetched but its content is not what we expect."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} is malformed: {reason}")


class NotReady(SkillDatabaseError):
    """The database was queried strictly before loading finished."""

    def __init__(self):
        super().__init__("Skill database has not finished loading")
