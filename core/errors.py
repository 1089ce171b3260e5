"""Exceptions raised by the auralingo core."""


class AuralingoError(Exception):
    """Base exception for all auralingo errors.

    Every error here is recoverable at the session or storage-call
    boundary; none should take the process down.
    """

    pass


class UnknownTopic(AuralingoError):
    """Raised when a session is started for a topic not in the catalog."""

    pass


class InvalidTopic(AuralingoError):
    """Raised when a topic cannot be run (no questions, bad options)."""

    pass


class SessionFinished(AuralingoError):
    """Raised when a question is requested after the last one was answered."""

    pass


class InvalidTransition(AuralingoError):
    """Raised when a session operation is called in the wrong phase."""

    pass


class UnknownWord(AuralingoError):
    """Raised when a word id is not in the word bank."""

    pass


class StorageUnavailable(AuralingoError):
    """Raised when the storage provider cannot be read or written."""

    pass
