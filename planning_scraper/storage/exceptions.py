class PersistenceError(Exception):
    """Raised when a document could not be stored anywhere."""


class LocalStorageError(PersistenceError):
    """Raised when writing a document to the local filesystem fails."""


class RemoteUploadError(PersistenceError):
    """Raised when uploading a document to the object store fails."""
