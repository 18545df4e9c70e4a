"""Custom exceptions. Everything the game raises derives from GameError, so the layers above can catch one type."""


class GameError(Exception):
    """Top-level exception for anything that goes wrong inside the game."""


class ConfigurationError(GameError):
    """Grid dimensions (or other settings) that make no sense. Game cannot be created."""


class InvalidStateError(GameError):
    """Operation does not fit the current state of the game (e.g. moving after the game finished)."""


class IllegalMoveError(GameError):
    """The requested wall cannot be claimed."""


class AlreadyClaimedError(IllegalMoveError):
    """Wall has an owner already. The move is rejected and the turn is not consumed."""


class UnknownWallError(IllegalMoveError):
    """Wall identity does not exist on this grid."""


class InvalidRequestError(GameError):
    """
    Request data could not be interpreted.

    NOTE not a ValueError on purpose: pydantic would wrap it into a ValidationError.
    """


class RepositoryError(GameError):
    """Persistence layer could not find (or store) the requested game."""
