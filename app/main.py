import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_models
from app.errors import ServiceError
from app.logging_setup import setup_logging
from app.routers.tasks import router as tasks_router
from app.routers.analysis import router as analysis_router
from app.routers.users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.ERROR_LOG_PATH)
    await init_models()
    logger.info("[APP] Team Task Manager started")

    yield

    logger.info("[APP] Team Task Manager shutting down")


app = FastAPI(
    lifespan=lifespan,
    title="Team Task Manager API",
    description="Team members, their tasks, and per-status statistics",
    version="1.0.0",
)

# Enable CORS for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid {location}: {first.get('msg', 'malformed request')}" if location else "Malformed request"
    return JSONResponse(status_code=400, content={"detail": message, "error": "validation"})


# Global exception handler to ensure CORS headers on failure
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("500 Error on %s %s", request.method, request.url.path, exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error", "error": "internal"},
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Credentials": "true"
        }
    )

app.include_router(users_router)
app.include_router(tasks_router)
app.include_router(analysis_router)

@app.get("/")
def root():
    return {"message": "Team Task Manager API running"}
