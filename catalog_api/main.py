# catalog_api/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.api.error_handlers import register_exception_handlers
from catalog_api.api.routers import categories, products_v1, products_v2, products_v3
from catalog_api.core.config import settings
from catalog_api.core.logging import get_logger, setup_logging
from catalog_api.core.metrics import export_metrics
from catalog_api.db.session_async import create_schema
from catalog_api.middleware import ObservabilityMiddleware, PayloadLimitMiddleware

# --- Models registration (needed for Alembic autogenerate and create_schema) ---
import catalog_api.models.catalog  # noqa: F401

logger = get_logger("catalog_api")

# --- API metadata for the generated docs ---
TAGS_METADATA = [
    {"name": "categories", "description": "Category management (v1)."},
    {"name": "products-v1", "description": "Products: base shape."},
    {"name": "products-v2", "description": "Products with image, discount and rating."},
    {"name": "products-v3", "description": "Products with a mandatory category."},
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    if settings.AUTO_CREATE_SCHEMA:
        await create_schema()
        logger.info("Database schema ensured", extra={"database": settings.ASYNC_DATABASE_URL})
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description=(
        "Versioned product catalog API.\n\n"
        "- **v1**: products and categories.\n"
        "- **v2**: products with `imageUrl`, `discountPercent` and `rating`.\n"
        "- **v3**: products bound to a category."
    ),
    openapi_tags=TAGS_METADATA,
    lifespan=lifespan,
)

# --- Middlewares ---
app.add_middleware(PayloadLimitMiddleware)
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Trace-Id"],
)

register_exception_handlers(app)

# --- Routers ---
app.include_router(categories.router, prefix=settings.API_V1_STR)
app.include_router(products_v1.router, prefix=settings.API_V1_STR)
app.include_router(products_v2.router, prefix=settings.API_V2_STR)
app.include_router(products_v3.router, prefix=settings.API_V3_STR)


@app.get("/", include_in_schema=False)
def root():
    return {"status": "ok", "docs_url": "/docs"}


@app.get("/metrics", include_in_schema=False)
def metrics():
    payload, content_type = export_metrics()
    return Response(content=payload, media_type=content_type)
