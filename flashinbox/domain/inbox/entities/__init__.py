from .card import Card, CardStatus
from .entry import ContentType, Entry

__all__ = ["Card", "CardStatus", "ContentType", "Entry"]
