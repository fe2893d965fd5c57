from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.dependencies.services import (
    get_dispatcher_cached,
    get_notifier_cached,
    get_record_store_instance,
    require_admin_key,
)

# Import routers directly from submodules
from app.mock_data_view import router as mock_data_router
from app.tools.admin_reviews import router as admin_reviews_router
from app.tools.calendar_slots import router as calendar_slots_router
from app.tools.reviews import router as reviews_router
from app.mcp_server import mcp
from app.health import router as health_router
from app.security import AdminKeyMiddleware


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)

# Configure logging as soon as the module is loaded
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    # --- Startup Logic ---
    settings = get_settings()

    settings_snapshot = settings.model_dump(
        exclude={"supabase_service_role_key", "admin_api_key"},
    )
    logger.info("Application settings on startup: %s", settings_snapshot)

    # One store client for the lifetime of the process
    store = get_record_store_instance(settings)
    dispatcher = get_dispatcher_cached()
    logger.info("Application startup complete.")

    try:
        async with mcp.session_manager.run():
            yield  # The application is now running
    finally:
        # --- Shutdown Logic ---
        logger.info("Waiting for %s pending notifications.", dispatcher.pending)
        await dispatcher.drain()
        await get_notifier_cached().close()
        logger.info("Closing record store connection.")
        await store.close()
        logger.info("Application shutdown complete.")


# --- Application Setup ---

settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers and Mounts ---

admin_guard = [Depends(require_admin_key)]

app.include_router(reviews_router, prefix="/api/reviews")
app.include_router(admin_reviews_router, prefix="/api/admin/reviews", dependencies=admin_guard)
app.include_router(calendar_slots_router, prefix="/api/admin/calendar-slots", dependencies=admin_guard)
app.include_router(health_router)
app.include_router(mock_data_router, dependencies=admin_guard)

# Mount the MCP Streamable HTTP server at /mcp; its tools moderate reviews,
# so it sits behind the same admin key as the admin routers.
mcp_app = mcp.streamable_http_app()
mcp_app.add_middleware(AdminKeyMiddleware)
app.mount("/mcp", mcp_app)
