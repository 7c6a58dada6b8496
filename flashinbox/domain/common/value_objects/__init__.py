from .ids import CardId, EntryId

__all__ = ["CardId", "EntryId"]
