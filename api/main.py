from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from buckets import router as buckets_router
from core.audit import AuditLogger
from core.connections import ConnectionManager
from core.errors import register_error_handlers
from core.limits import UploadSizeLimitMiddleware
from core.log_config import configure_logging
from core.settings import Settings, load_settings
from products import router as products_router
from users import router as users_router

OPENAPI_TAGS = [
    {"name": "CRUD MongoDb", "description": "User CRUD on the document store."},
    {"name": "Buckets", "description": "List buckets, upload and delete files in object storage."},
    {"name": "CRUD MySQL", "description": "Product CRUD on the relational store."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open store handles once per process; a down store is logged, not fatal.
    connections: ConnectionManager = app.state.connections
    await connections.start()
    try:
        yield
    finally:
        await connections.close()


def create_app(
    settings: Settings | None = None,
    *,
    connections: ConnectionManager | None = None,
    audit: AuditLogger | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Datastore Gateway",
        description="CRUD gateway over a document store, a relational store and object storage.",
        lifespan=lifespan,
        docs_url="/api-docs",
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.connections = connections or ConnectionManager(settings)
    app.state.audit = audit or AuditLogger()

    app.add_middleware(UploadSizeLimitMiddleware, max_upload_bytes=settings.max_upload_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT", "POST", "DELETE"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)

    app.include_router(users_router.router, tags=["CRUD MongoDb"])
    app.include_router(buckets_router.router, tags=["Buckets"])
    app.include_router(products_router.router, tags=["CRUD MySQL"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "datastore gateway api", "docs": "/api-docs"}

    return app


app = create_app()
