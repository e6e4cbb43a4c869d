"""Infrastructure-level failures. Not domain errors: never retried by the core."""


class StorageError(Exception):
    """The backing store could not be read or written."""
