"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class NotFoundError(AppError):
    """Raised when the backend does not know a requested resource."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class BracketError(AppError):
    """Raised when a bracket operation cannot be applied."""

    def __init__(self, message="Invalid bracket operation.", status_code=400):
        """Initialize the error."""
        super().__init__(message, status_code)


class WinnerNotParticipantError(BracketError):
    """Raised when the chosen winner does not play in the match."""

    def __init__(self, message="winner not a participant"):
        """Initialize the error."""
        super().__init__(message)


class MatchNotReadyError(BracketError):
    """Raised when a winner is set on a match that lacks an opponent."""

    def __init__(self, message="Both players must be assigned to the match unless it is a bye."):
        """Initialize the error."""
        super().__init__(message)


class MatchNotFoundError(BracketError):
    """Raised when a match id is not part of the bracket."""

    def __init__(self, message="Match not found in bracket."):
        """Initialize the error."""
        super().__init__(message, 404)


class SuccessorFullError(BracketError):
    """Raised when the next-round match already holds two other players."""

    def __init__(self, message="The next match already has two players."):
        """Initialize the error."""
        super().__init__(message, 409)


class SuccessorDecidedError(BracketError):
    """Raised when a result is changed after the next match was decided."""

    def __init__(self, message="The next match already has a winner."):
        """Initialize the error."""
        super().__init__(message, 409)
