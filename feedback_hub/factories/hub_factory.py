"""
Factory for creating and wiring components of Feedback Hub.

This module handles the creation and dependency injection for all
services and components used in the system.
"""

import logging
from typing import Any, Dict

# Service imports
from feedback_hub.services.analysis import (
    AnalysisService,
    DEFAULT_REMOTE_TIMEOUT,
    LocalClassifier,
    RemoteClassifier,
)
from feedback_hub.services.feedback import FeedbackService
from feedback_hub.services.insights import InsightsService
from feedback_hub.services.user import UserService

# Repository imports
from feedback_hub.repositories.feedback import MongoFeedbackRepository
from feedback_hub.repositories.user import MongoUserRepository

# Adapter imports
from feedback_hub.adapters.broadcast_adapter import WebSocketBroadcaster
from feedback_hub.adapters.mongodb_adapter import MongoDBAdapter
from feedback_hub.adapters.openai_adapter import OpenAIAdapter

# Domain imports
from feedback_hub.domains import ClassifierStrategy

# Setup logger for this module
logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "production"


class FeedbackHubFactory:
    """Factory for creating and wiring components of Feedback Hub."""

    @staticmethod
    def resolve_strategy(config: Dict[str, Any]) -> ClassifierStrategy:
        """Pick the classifier strategy once, from the presence of an OpenAI key."""
        if config.get("openai", {}).get("api_key"):
            return ClassifierStrategy.REMOTE
        return ClassifierStrategy.LOCAL

    @staticmethod
    def create_analysis_service(config: Dict[str, Any]) -> AnalysisService:
        """Create the analysis service for the configured strategy.

        Args:
            config: Configuration dictionary

        Returns:
            Analysis service with a local fallback
        """
        strategy = FeedbackHubFactory.resolve_strategy(config)
        if strategy == ClassifierStrategy.LOCAL:
            logger.info("No OpenAI API key configured; using the local classifier")
            return AnalysisService(strategy=strategy, local_classifier=LocalClassifier())

        openai_config = config["openai"]
        model = openai_config.get("model")
        timeout = float(openai_config.get("timeout", DEFAULT_REMOTE_TIMEOUT))
        if model:
            logger.info(f"Using OpenAI classifier with model: {model}")
        else:
            logger.info("Using OpenAI classifier")

        adapter_kwargs: Dict[str, Any] = {
            "api_key": openai_config["api_key"],
            "model": model,
            "timeout": timeout,
        }
        if "logfire" in config:
            if "api_key" not in config["logfire"]:
                raise ValueError("Pydantic Logfire API key is required.")
            adapter_kwargs["logfire_api_key"] = config["logfire"]["api_key"]
        llm_adapter = OpenAIAdapter(**adapter_kwargs)

        return AnalysisService(
            strategy=strategy,
            local_classifier=LocalClassifier(),
            remote_classifier=RemoteClassifier(
                llm_provider=llm_adapter, model=model, timeout=timeout
            ),
        )

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """Create the service graph from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Keyword arguments for ``FeedbackHub``: the feedback, insights and
            user services, the broadcaster, environment and CORS origins
        """
        if "mongo" not in config:
            raise ValueError("MongoDB configuration is required.")
        if "connection_string" not in config["mongo"]:
            raise ValueError("MongoDB connection string is required.")
        if "database" not in config["mongo"]:
            raise ValueError("MongoDB database name is required.")

        db_adapter = MongoDBAdapter(
            connection_string=config["mongo"]["connection_string"],
            database_name=config["mongo"]["database"],
        )

        feedback_repository = MongoFeedbackRepository(db_adapter)
        user_repository = MongoUserRepository(db_adapter)

        analysis_service = FeedbackHubFactory.create_analysis_service(config)
        broadcaster = WebSocketBroadcaster()

        return {
            "feedback_service": FeedbackService(
                feedback_repository=feedback_repository,
                user_repository=user_repository,
                analysis_service=analysis_service,
                broadcaster=broadcaster,
            ),
            "insights_service": InsightsService(
                feedback_repository=feedback_repository,
                analysis_service=analysis_service,
            ),
            "user_service": UserService(user_repository),
            "broadcaster": broadcaster,
            "environment": config.get("environment", DEFAULT_ENVIRONMENT),
            "cors_origins": config.get("cors_origins", ["*"]),
        }
