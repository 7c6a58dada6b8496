"""Repository for stored PDF files."""

import logging
import os
from pathlib import Path
from typing import BinaryIO

from flashinbox.config import PDFS_DIRNAME
from flashinbox.domain.common.exceptions import StorageError, ValidationError
from flashinbox.domain.common.value_objects import EntryId

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"


class FileRepository:
    """
    Stores PDFs under <storage_root>/pdfs.

    Files are referenced by a path relative to the storage root, such as
    "pdfs/pdf_<uuid>.pdf", so the root can move without touching the database.
    """

    def __init__(self, storage_root: Path | str) -> None:
        self.storage_root = Path(storage_root)

    @property
    def pdfs_dir(self) -> Path:
        return self.storage_root / PDFS_DIRNAME

    def save_pdf(self, stream: BinaryIO, entry_id: EntryId, max_bytes: int | None = None) -> str:
        """
        Copy a PDF stream into storage.

        The bytes go to a temporary file in the target directory, which is
        fsynced and then renamed into place, so a reference never points at a
        half written file.

        Args:
            stream: Readable binary stream
            entry_id: ID of the owning entry, used to name the file
            max_bytes: Reject payloads larger than this

        Returns:
            Storage-relative reference of the stored file

        Raises:
            ValidationError: If the payload is empty or exceeds max_bytes
            StorageError: If the stream cannot be read or the file written
        """
        filename = f"pdf_{entry_id.value}.pdf"
        file_path = self.pdfs_dir / filename
        partial_path = file_path.with_name(filename + PARTIAL_SUFFIX)

        try:
            self.pdfs_dir.mkdir(parents=True, exist_ok=True)
            copied = 0
            with partial_path.open("wb") as out:
                while chunk := stream.read(COPY_CHUNK_SIZE):
                    copied += len(chunk)
                    if max_bytes is not None and copied > max_bytes:
                        raise ValidationError(
                            f"PDF exceeds the upload limit of {max_bytes} bytes", field="file"
                        )
                    out.write(chunk)
                out.flush()
                os.fsync(out.fileno())
            if copied == 0:
                raise ValidationError("PDF payload is empty", field="file")
            os.replace(partial_path, file_path)
        except ValidationError:
            partial_path.unlink(missing_ok=True)
            raise
        except (OSError, ValueError) as e:
            partial_path.unlink(missing_ok=True)
            logger.error(f"Failed to store PDF for entry {entry_id}: {e!s}")
            raise StorageError(f"Failed to store PDF: {e!s}") from e

        logger.info(f"Saved PDF file: {file_path} ({copied} bytes)")
        return f"{PDFS_DIRNAME}/{filename}"

    def resolve(self, reference: str) -> Path:
        """
        Absolute path of a stored file reference.

        Raises:
            ValidationError: If the reference points outside the storage root
        """
        root = self.storage_root.resolve()
        path = (root / reference).resolve()
        if root not in path.parents:
            raise ValidationError("File reference escapes storage", field="content", value=reference)
        return path

    def delete_file(self, reference: str) -> bool:
        """
        Delete a stored file.

        Failures are logged and reported as False; callers never fail because
        a file could not be removed.

        Returns:
            True if file was deleted, False otherwise
        """
        try:
            path = self.resolve(reference)
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"Stored file already gone: {reference}")
            return False
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to delete stored file {reference}: {e!s}")
            return False
        logger.info(f"Deleted stored file: {path}")
        return True
