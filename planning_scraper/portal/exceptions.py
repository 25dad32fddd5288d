class SessionError(Exception):
    """Raised when the disclaimer/postback session cannot be established."""


class FormActionMissing(SessionError):
    """Raised when the disclaimer page has no form action to submit to."""
