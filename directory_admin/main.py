import logging
from urllib.parse import urlparse

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from directory_admin.api.exception_handlers import register_exception_handlers
from directory_admin.api.router import api_router
from directory_admin.core.config import Settings, load_settings
from directory_admin.core.security import TokenIssuer
from directory_admin.db.base import Database

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its process-wide services.

    The database pool and token issuer are created here, once, and reached by
    handlers only through the dependencies in directory_admin.api.deps.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Provider Directory Admin API")
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.tokens = TokenIssuer(
        settings.secret_key,
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )

    if settings.frontend_url:
        parsed = urlparse(settings.frontend_url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[origin],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("Application configured")
    return app


app = create_app()
