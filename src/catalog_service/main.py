"""Main FastAPI application for the Document Catalog Service."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config.settings import get_settings
from .config.rules import load_classification_rules
from .infrastructure.database.client import DatabaseClient
from .infrastructure.storage.file_store import FileStore
from .core.exceptions import ServiceError, StoreError
from .core.knowledge.classifier import Classifier
from .core.knowledge.extraction import TextExtractor
from .core.document_manager import DocumentManager
from .core.search_manager import SearchManager
from .core.category_manager import CategoryManager
from .api.routes import documents, search, categories
from .models.requests import ErrorResponse, HealthResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# Global instances
db_client: DatabaseClient = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    global db_client

    settings = get_settings()
    logger.info(f"Starting {settings.service_name} v{VERSION}")

    logger.info("Initializing database...")
    db_client = DatabaseClient(settings.database_url)
    await db_client.initialize()

    logger.info(f"Using upload directory {settings.upload_dir}")
    file_store = FileStore(settings.upload_dir)

    logger.info("Loading classification rules...")
    classifier = Classifier(load_classification_rules(settings.classification_rules_path))

    doc_mgr = DocumentManager(
        db_client,
        file_store,
        TextExtractor(),
        classifier,
        default_category_color=settings.default_category_color,
        max_upload_size=settings.max_upload_size,
    )
    search_mgr = SearchManager(
        db_client,
        suggestion_min_length=settings.suggestion_min_length,
        suggestion_candidates=settings.suggestion_candidates,
        suggestion_limit=settings.suggestion_limit,
        popular_documents=settings.popular_documents,
        popular_limit=settings.popular_limit,
    )
    category_mgr = CategoryManager(db_client, default_color=settings.default_category_color)

    # Set managers in route modules
    documents.set_managers(doc_mgr, search_mgr)
    search.set_search_manager(search_mgr)
    categories.set_category_manager(category_mgr)

    logger.info(f"{settings.service_name} is ready")

    yield

    # Cleanup
    logger.info("Shutting down...")
    await db_client.close()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Document Catalog Service",
    description="Upload, auto-classify and search team documents",
    version=VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render service errors as JSON with their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")

    body = ErrorResponse(message=exc.message, code=exc.code)
    if not isinstance(exc, StoreError):
        body.details = exc.details
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Include routers
app.include_router(documents.router)
app.include_router(search.router)
app.include_router(categories.router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    db_connected = False
    if db_client is not None:
        try:
            db_connected = await db_client.verify_connection()
        except StoreError:
            db_connected = False

    return HealthResponse(
        status="healthy" if db_connected else "degraded",
        service=get_settings().service_name,
        version=VERSION,
        database_connected=db_connected
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": get_settings().service_name,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "catalog_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
