"""Storage of uploaded PDFs: bytes on local disk, metadata in the database."""
import logging
from http import HTTPStatus
from pathlib import Path
from typing import List, Optional, Union

import aiofiles
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from docportal.models.document import Document, utc_now_iso
from docportal.utils.filenames import FileNames

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MiB
# SQLite INTEGER is a signed 64-bit value
MAX_DOCUMENT_ID = 2**63 - 1


class DocumentServiceError(Exception):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(DocumentServiceError):
    status_code = HTTPStatus.BAD_REQUEST


class NotFound(DocumentServiceError):
    status_code = HTTPStatus.NOT_FOUND


class PayloadTooLarge(DocumentServiceError):
    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE


class UnsupportedMediaType(DocumentServiceError):
    status_code = HTTPStatus.UNSUPPORTED_MEDIA_TYPE


def parse_document_id(doc_id: Union[str, int]) -> int:
    """
    Turn a path segment into a document id.

    Anything that cannot name a row (not an integer, or out of the
    column's range) raises NotFound, the same as an unknown id.
    """
    try:
        document_id = int(doc_id)
    except (TypeError, ValueError):
        raise NotFound("Not found") from None
    if not 0 < document_id <= MAX_DOCUMENT_ID:
        raise NotFound("Not found")
    return document_id


class DocumentService:
    """
    Upload, list, download and delete documents.

    A row is only ever inserted after its file has been written, and every
    read that finds a row without its file removes the row before reporting
    ``NotFound``.
    """

    def __init__(self, db: Session, upload_dir: Union[str, Path]) -> None:
        self.db = db
        self.upload_dir = Path(upload_dir).resolve()

    async def upload(self, file: Optional[UploadFile]) -> Document:
        """
        Store an uploaded PDF and record its metadata.

        Args:
            file: Multipart upload, or None when the request carried no file

        Returns:
            The inserted Document, id populated

        Raises:
            BadRequest: No file in the request
            UnsupportedMediaType: Neither the media type nor the name says PDF
            PayloadTooLarge: More than MAX_UPLOAD_SIZE bytes
        """
        if file is None or not file.filename:
            raise BadRequest("No file uploaded")

        if not FileNames.is_pdf(file.filename, file.content_type):
            raise UnsupportedMediaType("Only PDF files are allowed")

        content = await file.read(MAX_UPLOAD_SIZE + 1)
        if len(content) > MAX_UPLOAD_SIZE:
            raise PayloadTooLarge(
                f"File too large. Maximum size is {MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
            )

        name = FileNames.normalize(file.filename)
        if not name:
            raise BadRequest("Invalid filename")

        file_path = await self._write_unique(name, content)

        document = Document(
            filename=file_path.name,
            filepath=str(file_path),
            filesize=len(content),
            created_at=utc_now_iso(),
        )
        try:
            self.db.add(document)
            self.db.commit()
            self.db.refresh(document)
        except SQLAlchemyError:
            self.db.rollback()
            file_path.unlink(missing_ok=True)
            raise

        logger.info(
            "Stored document %s as %s (%d bytes)", document.id, document.filename, document.filesize
        )
        return document

    async def _write_unique(self, name: str, content: bytes) -> Path:
        # Exclusive create reserves the name, so two concurrent uploads of
        # the same name land on different files.
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        for candidate in FileNames.candidates(name):
            file_path = self.upload_dir / candidate
            try:
                async with aiofiles.open(file_path, "xb") as buffer:
                    await buffer.write(content)
            except FileExistsError:
                continue
            except OSError:
                file_path.unlink(missing_ok=True)
                raise
            return file_path

    def list_documents(self) -> List[Document]:
        """All documents, newest first."""
        return (
            self.db.query(Document)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .all()
        )

    def get_for_download(self, doc_id: Union[str, int]) -> Document:
        """
        Look up a document whose file is still on disk.

        A row whose file has gone missing is deleted here, so the next
        listing no longer shows it.
        """
        document = self._get(doc_id)
        if not Path(document.filepath).is_file():
            logger.warning(
                "File for document %s missing at %s, removing metadata", doc_id, document.filepath
            )
            self._delete_row(document)
            raise NotFound("File missing on server")
        return document

    def delete(self, doc_id: Union[str, int]) -> int:
        """Remove a document's file, if still present, and its row. Returns the id."""
        document = self._get(doc_id)
        document_id, filename = document.id, document.filename
        Path(document.filepath).unlink(missing_ok=True)
        self._delete_row(document)
        logger.info("Deleted document %s (%s)", document_id, filename)
        return document_id

    def _get(self, doc_id: Union[str, int]) -> Document:
        document_id = parse_document_id(doc_id)
        document = self.db.query(Document).filter(Document.id == document_id).first()
        if not document:
            raise NotFound("Not found")
        return document

    def _delete_row(self, document: Document) -> None:
        try:
            self.db.delete(document)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
