from ticketapp.models.storage_entry import StorageEntry  # noqa: F401
