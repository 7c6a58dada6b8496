from .card_repository import CardRepository
from .entry_repository import EntryRepository
from .file_repository import FileRepository

__all__ = ["CardRepository", "EntryRepository", "FileRepository"]
