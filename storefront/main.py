import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.core.config import settings
from storefront.core.errors import NotFound, StoreError, StorefrontError, ValidationError
from storefront.core.logging import setup_logging, log_success
from storefront.db.session import create_db_and_tables

setup_logging()
logger = logging.getLogger("storefront.server")

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    log_success(logger, "Connected to the database successfully.")
    yield
    logger.info("Shutting down gracefully...")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    description="Catalog, users and shopping cart API"
)

ERROR_STATUS = (
    (ValidationError, 400),
    (NotFound, 404),
    (StoreError, 500),
)

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    status_code = next((code for kind, code in ERROR_STATUS if isinstance(exc, kind)), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)
    content = {"message": exc.message}
    if exc.detail:
        content["error"] = exc.detail
    return JSONResponse(status_code=status_code, content=content)

@app.get("/")
def read_root():
    return {"message": "Server is running"}

from storefront.routers import cart, products, users

app.include_router(products.router, prefix="/products", tags=["products"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(cart.router, prefix="/cart", tags=["cart"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
