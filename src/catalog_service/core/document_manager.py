"""Document ingestion and management business logic."""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..infrastructure.database.client import DatabaseClient
from ..infrastructure.database.models import DocumentModel
from ..infrastructure.storage.file_store import FileStore
from ..models.document import Document, DocumentUpdate
from .exceptions import FileCleanupError, NotFoundError, StoreError, ValidationError
from .knowledge.classifier import Classifier
from .knowledge.extraction import TextExtractor, classify_file_kind
from .knowledge.keywords import extract_keywords

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "category", "project", "team", "tags")


class DocumentManager:
    """Business logic for ingesting, reading, editing and deleting documents."""

    def __init__(
        self,
        db_client: DatabaseClient,
        file_store: FileStore,
        extractor: TextExtractor,
        classifier: Classifier,
        default_category_color: str = "#3B82F6",
        max_upload_size: Optional[int] = None,
    ):
        """Initialize document manager.

        Args:
            db_client: Database client for document and category records
            file_store: Storage for the uploaded binaries
            extractor: Text extractor for stored files
            classifier: Rule-table classifier
            default_category_color: Color given to implicitly created categories
            max_upload_size: Largest accepted upload in bytes (unbounded if None)
        """
        self.db = db_client
        self.files = file_store
        self.extractor = extractor
        self.classifier = classifier
        self.default_category_color = default_category_color
        self.max_upload_size = max_upload_size

    async def ingest(
        self,
        file_bytes: Optional[bytes],
        file_name: Optional[str],
        file_size: Optional[int] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        project: Optional[str] = None,
        team: Optional[str] = None,
        uploaded_by: Optional[str] = None,
    ) -> Document:
        """Store, extract, classify and index an uploaded file.

        Explicit category/project/team values take precedence over the
        classifier; a missing title falls back to the file name.

        Args:
            file_bytes: Raw file content
            file_name: Original file name (drives the file kind)
            file_size: Size in bytes, defaults to len(file_bytes)

        Returns:
            Created document

        Raises:
            ValidationError: If no file was supplied or it is too large
        """
        if file_bytes is None or not file_name:
            raise ValidationError("No file uploaded")

        size = file_size if file_size is not None else len(file_bytes)
        if self.max_upload_size is not None and size > self.max_upload_size:
            raise ValidationError(
                f"File size exceeds the maximum of {self.max_upload_size} bytes",
                status_code=413,
                details={"file_size": size},
            )

        file_kind = classify_file_kind(file_name)
        file_path = await self.files.write(file_bytes, file_name)

        content = await self.extractor.extract(file_path, file_kind)

        resolved_title = title or file_name
        resolved_description = description or ""
        classification = self.classifier.categorize(resolved_title, resolved_description, content)
        keywords = extract_keywords(f"{resolved_title} {resolved_description} {content}")

        now = datetime.now(timezone.utc)
        db_doc = DocumentModel(
            title=resolved_title,
            description=resolved_description,
            file_name=file_name,
            file_path=file_path,
            file_type=file_kind.value,
            file_size=size,
            content=content,
            category=category or classification.category,
            project=project or classification.project,
            team=team or classification.team,
            tags=classification.tags,
            keywords=keywords,
            uploaded_by=uploaded_by or "System",
            upload_date=now,
            last_modified=now,
            view_count=0,
            created_at=now,
            updated_at=now,
        )

        try:
            document_id = await self.db.insert_document(db_doc)
        except StoreError:
            await self._remove_file(file_path)
            raise

        await self.db.upsert_increment_category(
            name=db_doc.category,
            delta=1,
            display_name=db_doc.category,
            color=self.default_category_color,
        )

        logger.info(
            f"Ingested document {document_id} '{resolved_title}' "
            f"({file_kind.value}, {len(content)} chars) as {db_doc.category}/{db_doc.project}/{db_doc.team}"
        )
        return Document.model_validate(db_doc)

    async def get_document(self, document_id: str) -> Document:
        """Fetch a document, counting the view.

        Raises:
            NotFoundError: If the document does not exist
        """
        if not await self.db.increment_field(document_id, "view_count", 1):
            raise NotFoundError(f"Document {document_id} not found")

        db_doc = await self.db.get_document(document_id)
        if not db_doc:
            raise NotFoundError(f"Document {document_id} not found")
        return Document.model_validate(db_doc)

    async def get_document_file(self, document_id: str) -> tuple[Document, bytes]:
        """Return a document (without counting a view) and its stored bytes.

        Raises:
            NotFoundError: If the document or its file does not exist
        """
        db_doc = await self.db.get_document(document_id)
        if not db_doc:
            raise NotFoundError(f"Document {document_id} not found")

        try:
            data = await self.files.read(db_doc.file_path)
        except FileNotFoundError as e:
            raise NotFoundError(f"File for document {document_id} not found") from e
        return Document.model_validate(db_doc), data

    async def update_document(self, document_id: str, updates: DocumentUpdate) -> Document:
        """Update editable metadata and stamp last_modified.

        Empty strings leave the corresponding field unchanged, while an empty
        tag list clears the tags. Extracted content, keywords and category
        counts are not touched.

        Raises:
            NotFoundError: If the document does not exist
        """
        update_dict = {
            field: getattr(updates, field)
            for field in EDITABLE_FIELDS
            if getattr(updates, field)
        }
        if updates.tags is not None:
            update_dict["tags"] = updates.tags
        update_dict["last_modified"] = datetime.now(timezone.utc)

        updated_doc = await self.db.update_document(document_id, **update_dict)
        if not updated_doc:
            raise NotFoundError(f"Document {document_id} not found")

        logger.info(f"Updated document {document_id}: {sorted(k for k in update_dict if k != 'last_modified')}")
        return Document.model_validate(updated_doc)

    async def delete_document(self, document_id: str) -> bool:
        """Delete a document, its stored file and its category count.

        The record is removed first; only the caller whose delete removed it
        decrements the category and removes the file. A file that cannot be
        removed is logged and left behind.

        Raises:
            NotFoundError: If the document does not exist
        """
        doc = await self.db.get_document(document_id)
        if not doc:
            raise NotFoundError(f"Document {document_id} not found")

        if not await self.db.delete_document(document_id):
            raise NotFoundError(f"Document {document_id} not found")

        await self.db.increment_category_count(doc.category, -1)
        await self._remove_file(doc.file_path, document_id)

        logger.info(f"Deleted document {document_id}")
        return True

    async def _remove_file(self, file_path: str, document_id: Optional[str] = None):
        try:
            await self.files.delete(file_path)
        except OSError as e:
            error = FileCleanupError(
                f"Could not delete file for document {document_id or file_path}",
                details={"file_path": file_path, "error": str(e)},
            )
            logger.error(str(error))
