"""Custom exceptions. Every error raised on purpose by this package derives from GameError."""


class GameError(Exception):
    """Top-level exception for the game engine."""


class ConfigError(GameError):
    """An environment setting could not be interpreted."""


class InvalidRequestError(GameError):
    """Request rejected before it reaches the service."""


# --- Domain / state machine ---
class GameStateError(GameError):
    """The requested action is not allowed in the current state of the game."""


class GameNotActiveError(GameStateError):
    pass


class NotYourTurnError(GameStateError):
    pass


class InvalidCoordinateError(GameStateError):
    """Coordinate is malformed or outside the 10x10 grid."""


class DuplicateShotError(GameStateError):
    """The firing side already shot at this coordinate."""


class BoardLayoutError(GameStateError):
    """A board does not satisfy the grid / fleet invariants."""


# --- Concurrency ---
class GameBusyError(GameError):
    """Another request for the same player is still in flight."""


class ActiveGameExistsError(GameBusyError):
    """A new game was requested while the player still has an active one."""


# --- Persistence ---
class RepositoryError(GameError):
    pass


class StorageError(RepositoryError):
    """Confirmed failure: the write did not happen."""


class StorageTimeoutError(StorageError):
    """No acknowledgement within the timeout: the write may or may not have happened."""
