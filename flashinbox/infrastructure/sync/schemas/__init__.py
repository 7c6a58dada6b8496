from flashinbox.infrastructure.sync.schemas.sync_schemas import (
    AnkiStatusResponse,
    CardSyncResponse,
    EntrySyncResponse,
    PermissionResponse,
)

__all__ = ["AnkiStatusResponse", "CardSyncResponse", "EntrySyncResponse", "PermissionResponse"]
