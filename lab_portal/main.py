import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .config import Settings, settings
from .database import make_engine, make_session_factory
from .models import Base
from .api import admin, auth, labs, timetable, users
from .core.exceptions import LabPortalError
from .services.auth_service import AuthService

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = LabPortalError.default_message


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON."
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    if not field:
        return f"Invalid request body: {first.get('msg')}"
    return f"Invalid value for {field}: {first.get('msg')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LabPortalError)
    async def lab_portal_error_handler(request: Request, exc: LabPortalError):
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _message(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _message(exc.status_code, f"The requested route '{request.url.path}' was not found.")
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled server error on %s %s", request.method, request.url.path, exc_info=exc)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    Base.metadata.create_all(bind=app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(app_settings: Settings = settings) -> FastAPI:
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=app_settings.app_name,
        description="Laboratory inventories and weekly timetables",
        version="1.0.0",
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.engine = make_engine(app_settings.database_url)
    app.state.session_factory = make_session_factory(app.state.engine)
    app.state.auth_service = AuthService(app_settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(admin.router)
    app.include_router(labs.router)
    app.include_router(timetable.router)

    register_exception_handlers(app)

    @app.get("/api/health")
    def health_check():
        return {"status": "OK", "message": "Lab Portal API is running successfully!"}

    return app


app = create_app()
