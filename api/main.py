import time
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

from api.shared.context import get_request_context
from api.shared.dtos import ErrorResponse
from api.shared.exceptions import AppException
from core.logging import configure_logging
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

configure_logging(SETTINGS.APP)

logger = structlog.get_logger("messaging")
request_logger = structlog.get_logger("messaging.requests")

# Environments that mount the credential-less /login route
LOGIN_ENVIRONMENTS = ("local", "dev")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("Starting application initialization...")
    start_time = time.time()

    try:
        logger.info("Initializing database connection...")
        db_start = time.time()
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        async with db_resource.engine.begin() as _conn:
            # Verify database connection
            await _conn.execute(text("SELECT 1"))
        logger.info(
            f"Database connection established in {time.time() - db_start:.2f}s"
        )

        logger.info(
            f"Application startup completed in {time.time() - start_time:.2f}s"
        )
    except Exception as e:
        logger.exception(f"Failed to initialize application: {str(e)}")
        raise

    yield

    try:
        db_resource = _app.container.infrastructure.database()
        if db_resource:
            await db_resource.shutdown()
        logger.info("Application shutdown complete")
    except Exception as e:
        logger.exception("Error during shutdown", error=str(e))


def create_fastapi_app() -> CustomFastAPI:
    _app = CustomFastAPI(
        title="Messaging API",
        description="Users and direct messages with cookie sessions",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        # Identity is resolved for every request, guarded or not
        dependencies=[Depends(get_request_context)],
    )

    # Initialize dependency container
    _app.container = DependencyContainer()
    _app.container.infrastructure.config.from_dict(SETTINGS.model_dump())
    _app.container.init_resources()

    _app.add_middleware(
        SessionMiddleware,
        secret_key=SETTINGS.SESSION.SESSION_SECRET_KEY.get_secret_value(),
        session_cookie=SETTINGS.SESSION.SESSION_COOKIE_NAME,
        max_age=SETTINGS.SESSION.SESSION_MAX_AGE,
        https_only=SETTINGS.SESSION.SESSION_HTTPS_ONLY,
    )

    include_routers(_app, SETTINGS.APP.ENVIRONMENT)

    return _app


def include_routers(_app: FastAPI, environment: str) -> None:
    from api.features.messages.router import router as messages_router
    from api.features.session.router import login_router
    from api.features.session.router import router as session_router
    from api.features.users.router import router as users_router

    if environment in LOGIN_ENVIRONMENTS:
        _app.include_router(login_router, tags=["Session"])
    _app.include_router(session_router, tags=["Session"])
    _app.include_router(users_router, prefix="/api/users", tags=["Users"])
    _app.include_router(messages_router, prefix="/messages", tags=["Messages"])


app = create_fastapi_app()


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    request_logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        duration_ms=round((time.time() - start) * 1000, 1),
    )
    return response


@app.get("/")
async def root():
    return RedirectResponse(url="/messages", status_code=302)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/ready")
async def ready():
    return {"status": "ok"}


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(
            "Request failed", path=request.url.path, error_code=exc.error_code, detail=exc.message
        )
    body = ErrorResponse(
        error=exc.error_code,
        detail=exc.message,
        status_code=exc.status_code,
        details=exc.details or None,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "detail": f"{exc.detail} : {request.url}",
            "status_code": 404,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Validation Error", "detail": str(exc), "status_code": 422},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception", error=str(exc))
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "status_code": 500,
        },
    )
