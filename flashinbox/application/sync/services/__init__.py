from .anki_sync_bridge import AnkiSyncBridge

__all__ = ["AnkiSyncBridge"]
