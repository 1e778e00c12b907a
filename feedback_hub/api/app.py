"""
FastAPI application factory.
"""
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedback_hub import __version__
from feedback_hub.api.errors import register_error_handlers
from feedback_hub.api.routers import feedback, health, insights, realtime
from feedback_hub.client.feedback_hub import FeedbackHub

logger = logging.getLogger(__name__)


def create_app(hub: FeedbackHub) -> FastAPI:
    """Create the API application around a wired hub.

    Args:
        hub: Hub holding the services every route operates on

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title="Feedback Hub",
        description="Feedback collection with automatic analysis and live dashboards",
        version=__version__,
    )
    app.state.hub = hub
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=hub.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, hub.environment)

    app.include_router(health.router, tags=["health"])
    app.include_router(feedback.router, prefix="/api/feedback", tags=["feedback"])
    app.include_router(insights.router, prefix="/api/insights", tags=["insights"])
    app.include_router(realtime.router, tags=["realtime"])

    logger.info(f"Feedback Hub API created ({hub.environment})")
    return app
