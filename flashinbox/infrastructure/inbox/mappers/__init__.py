from .card_mapper import CardMapper
from .entry_mapper import EntryMapper

__all__ = ["CardMapper", "EntryMapper"]
