"""
Exceptions raised by the game engine

Invalid moves and refused bomb plants are ordinary no-ops, not errors.
"""


class GameError(Exception):
    """Base class for engine errors"""


class SaveError(GameError):
    """Snapshot could not be written"""


class LoadError(GameError):
    """Snapshot is missing, unreadable or corrupt"""
