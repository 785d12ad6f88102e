"""Document upload and CRUD endpoints."""

import logging
import mimetypes
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from ...core.document_manager import DocumentManager
from ...core.search_manager import SearchManager
from ...models.document import DocumentResponse, DocumentUpdate
from ...models.requests import DocumentListResponse, Pagination, SearchFilters
from ..dependencies import PageParams, get_page_params, get_search_filters

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])
logger = logging.getLogger(__name__)

# These will be set by main.py after creating the app
doc_manager: DocumentManager = None
search_manager: SearchManager = None


def set_managers(doc_mgr: DocumentManager, search_mgr: SearchManager = None):
    """Set the manager instances (called from main.py)."""
    globals()['doc_manager'] = doc_mgr
    if search_mgr:
        globals()['search_manager'] = search_mgr


@router.post(
    "/upload",
    response_model=DocumentResponse,
    status_code=201,
    summary="Upload Document",
    description="""
Upload a file and index it.

**Workflow**:
1. Determine the file kind from the file name extension
2. Store the file on disk
3. Extract text (PDF, DOCX, TXT, MD, HTML; images and other files yield no text)
4. Infer category, project, team and tags from title, description and text
5. Extract keywords for suggestions and popular terms
6. Persist the document and increment its category's document count

Explicit `category`, `project` and `team` form fields override the inferred values.
    """,
    responses={
        201: {"description": "Document uploaded and indexed"},
        413: {"description": "File too large"},
        422: {"description": "No file uploaded"},
        500: {"description": "Internal server error during upload"}
    }
)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    project: Optional[str] = Form(None),
    team: Optional[str] = Form(None),
    uploaded_by: Optional[str] = Form(None),
):
    """Upload and index a document."""
    file_bytes = await file.read() if file is not None else None
    document = await doc_manager.ingest(
        file_bytes=file_bytes,
        file_name=file.filename if file is not None else None,
        file_size=len(file_bytes) if file_bytes is not None else None,
        title=title,
        description=description,
        category=category,
        project=project,
        team=team,
        uploaded_by=uploaded_by,
    )
    return DocumentResponse.from_document(document)


@router.get(
    "",
    response_model=DocumentListResponse,
    summary="List Documents",
    description="""
List documents, most viewed first (newest first among equal view counts).

**Query Parameters**:
- `page`, `limit`: pagination
- `category`, `project`, `team`, `file_type`: equality filters (combined with AND)

Extracted content is omitted from listed documents.
    """,
)
async def list_documents(
    pages: PageParams = Depends(get_page_params),
    filters: SearchFilters = Depends(get_search_filters),
):
    """List documents with pagination."""
    result = await search_manager.search(
        filters=filters,
        sort="views",
        page=pages.page,
        limit=pages.limit,
    )
    return DocumentListResponse(
        documents=[DocumentResponse.from_document(doc) for doc in result.results],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    summary="Get Document",
    description="Retrieve a document including its extracted content. Each call increments the view count.",
    responses={
        200: {"description": "Document retrieved successfully"},
        404: {"description": "Document not found"},
    }
)
async def get_document(document_id: str):
    """Get document by ID."""
    document = await doc_manager.get_document(document_id)
    return DocumentResponse.from_document(document)


@router.get(
    "/{document_id}/file",
    summary="Download Document File",
    responses={
        200: {"description": "Original uploaded file"},
        404: {"description": "Document or file not found"},
    }
)
async def get_document_file(document_id: str):
    """Return the originally uploaded file."""
    document, data = await doc_manager.get_document_file(document_id)
    media_type = mimetypes.guess_type(document.file_name)[0] or "application/octet-stream"
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(document.file_name)}"},
    )


@router.put(
    "/{document_id}",
    response_model=DocumentResponse,
    summary="Update Document",
    description="""
Update a document's title, description, category, project, team or tags.

Empty strings leave fields unchanged. Extracted content and keywords are never
regenerated, and category document counts are not adjusted.
    """,
    responses={
        200: {"description": "Document updated successfully"},
        404: {"description": "Document not found"},
    }
)
async def update_document(document_id: str, updates: DocumentUpdate):
    """Update document."""
    document = await doc_manager.update_document(document_id, updates)
    return DocumentResponse.from_document(document)


@router.delete(
    "/{document_id}",
    summary="Delete Document",
    description="""
Delete a document.

**Workflow**:
1. Remove the stored file (failures are logged, deletion continues)
2. Decrement the category's document count
3. Remove the document record
    """,
    responses={
        200: {"description": "Document deleted successfully"},
        404: {"description": "Document not found"},
    }
)
async def delete_document(document_id: str):
    """Delete document."""
    await doc_manager.delete_document(document_id)
    return {"success": True, "message": "Document deleted successfully"}
