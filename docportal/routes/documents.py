"""Document routes."""
import logging
from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from docportal.db.sessions import get_db
from docportal.services.document_service import DocumentService, DocumentServiceError
from docportal.utils.filenames import PDF_MEDIA_TYPE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])


# Response schemas
class DocumentResponse(BaseModel):
    id: int
    filename: str
    filepath: str
    filesize: int
    created_at: str

    class Config:
        from_attributes = True


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def get_document_service(request: Request, db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(db, request.app.state.settings.UPLOAD_DIR)


@router.post("/upload", response_model=DocumentResponse, status_code=HTTPStatus.CREATED)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    service: DocumentService = Depends(get_document_service),
):
    """
    Upload a single PDF (multipart field ``file``).

    Returns the stored document with its resolved filename.
    """
    try:
        document = await service.upload(file)
        return JSONResponse(
            status_code=HTTPStatus.CREATED,
            content=DocumentResponse.model_validate(document).model_dump(),
        )
    except DocumentServiceError as e:
        logger.info("Upload rejected: %s", e.message)
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception("Unexpected server error during upload")
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(e) or "Upload failed")


@router.get("", response_model=List[DocumentResponse])
def list_documents(service: DocumentService = Depends(get_document_service)):
    """List every document, newest first."""
    try:
        documents = service.list_documents()
        return [DocumentResponse.model_validate(d) for d in documents]
    except Exception as e:
        logger.exception("Unexpected server error while listing documents")
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(e) or "Listing failed")


@router.get("/{doc_id}")
def download_document(doc_id: str, service: DocumentService = Depends(get_document_service)):
    """
    Download a document's file.

    Responds 404 when the row is unknown, and also when the file has
    disappeared from disk, in which case the row is removed.
    """
    try:
        document = service.get_for_download(doc_id)
    except DocumentServiceError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception("Unexpected server error during download of %s", doc_id)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(e) or "Download failed")

    return FileResponse(path=document.filepath, media_type=PDF_MEDIA_TYPE, filename=document.filename)


@router.delete("/{doc_id}", response_model=DeleteResponse)
def delete_document(doc_id: str, service: DocumentService = Depends(get_document_service)):
    """Delete a document's file (if still present) and its row."""
    try:
        document_id = service.delete(doc_id)
        return DeleteResponse(message=f"Deleted document {document_id}")
    except DocumentServiceError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception("Unexpected server error during delete of %s", doc_id)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(e) or "Delete failed")
