from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import uvicorn

from app.core.config import settings
from app.core.exceptions import AstroError
from app.api.v1.api import router
from app.db import build_engine, build_session_factory, create_tables
from app.models.order import SERVICE_COSTS
from app.services.order_service import OrderService
from app.services.content_service import ContentGenerator

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Crear el almacén de pedidos y el generador al iniciar la aplicación
    engine = build_engine(settings.database_url)
    create_tables(engine)
    app.state.order_service = OrderService(build_session_factory(engine))
    app.state.content_generator = ContentGenerator.from_settings(settings)

    logger.info("Astrology Bot Backend running on port %s", settings.app_port)
    logger.info("Available services: %s", list(SERVICE_COSTS))
    logger.info("Gemini API: %s", "Configured" if settings.gemini_enabled else "Not configured")
    logger.info("Telegram bot: %s", "Configured" if settings.bot_token else "Not configured")

    yield

    engine.dispose()


app = FastAPI(title=settings.project_name, lifespan=lifespan)

cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AstroError)
async def astro_error_handler(request: Request, exc: AstroError):
    return JSONResponse(status_code=exc.status_code,
                        content={"success": False, "error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code,
                        content={"success": False, "error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors.append(f"{field}: {error['msg']}" if field else error["msg"])

    return JSONResponse(status_code=400,
                        content={"success": False, "error": "; ".join(errors) or "Invalid request"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500,
                        content={"success": False, "error": "Internal server error"})


app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
def read_root():
    return {
        "message": "Astrology Bot Backend is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": [
            f"{settings.api_prefix}{route.path}"
            for route in router.routes
        ] + [f"{settings.api_prefix}/health"],
    }


@app.get(f"{settings.api_prefix}/health")
def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": list(SERVICE_COSTS),
    }


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.app_port)
