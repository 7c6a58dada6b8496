"""Protocol for stored PDF files."""

from pathlib import Path
from typing import BinaryIO, Protocol

from flashinbox.domain.common.value_objects import EntryId


class FileRepositoryProtocol(Protocol):
    """Protocol for PDF file storage."""

    def save_pdf(self, stream: BinaryIO, entry_id: EntryId, max_bytes: int | None = None) -> str:
        """
        Copy a PDF stream into storage.

        Args:
            stream: Readable binary stream with the PDF bytes
            entry_id: ID of the entry that will own the file
            max_bytes: Reject payloads larger than this

        Returns:
            Storage-relative reference of the stored file

        Raises:
            ValidationError: If the payload is empty or too large
            StorageError: If reading or writing fails
        """
        ...

    def resolve(self, reference: str) -> Path:
        """Absolute path of a stored file reference."""
        ...

    def delete_file(self, reference: str) -> bool:
        """
        Delete a stored file, logging instead of raising on failure.

        Returns:
            True if a file was removed
        """
        ...
