class RushEscapeError(Exception):
    """Base exception class for escape puzzle errors."""
    pass


class PuzzleFormatError(RushEscapeError, ValueError):
    """Raised when a puzzle definition or vehicle list is malformed."""
    pass


class InvalidMove(RushEscapeError):
    """Raised when a supplied move cannot be played on a board."""
    pass


class SearchInvariantError(RushEscapeError, RuntimeError):
    """Raised when the visited-state table disagrees with the explored graph."""
    pass
