class StorageError(RuntimeError):
    """Raised when the snapshot store cannot be read or written (I/O failure, corrupt data)."""
    pass


class SnapshotVersionError(StorageError):
    """Raised when a stored snapshot has a schema version with no migration path."""
    pass
