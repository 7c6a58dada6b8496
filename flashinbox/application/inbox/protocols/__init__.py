from .card_repository import CardRepositoryProtocol
from .entry_repository import EntryRepositoryProtocol
from .file_repository import FileRepositoryProtocol
from .web_clipper import ClippedPage, WebClipperProtocol

__all__ = [
    "CardRepositoryProtocol",
    "ClippedPage",
    "EntryRepositoryProtocol",
    "FileRepositoryProtocol",
    "WebClipperProtocol",
]
