"""
Error taxonomy for the completion handler and follow-up management.

Every error carries the HTTP status the API layer answers with.
"""


class NextActionError(Exception):
    """Base class for all domain errors."""
    status_code = 500

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message, 'type': type(self).__name__}


class NotFound(NextActionError):
    """Referenced lead or task no longer exists."""
    status_code = 404


class StateConflict(NextActionError):
    """Transition not allowed from the current state (e.g. task already done)."""
    status_code = 409


class ValidationError(NextActionError):
    """Malformed input: bad follow-up task fields or a non-completable action."""
    status_code = 400
