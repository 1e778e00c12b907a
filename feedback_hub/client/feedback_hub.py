"""
Entry point object for Feedback Hub.

A FeedbackHub holds the wired services that the HTTP API and the CLI
operate on.
"""

import json
import importlib.util
from typing import Any, Dict, List, Optional

from feedback_hub.interfaces.providers import EventBroadcaster
from feedback_hub.interfaces.services import (
    FeedbackService,
    InsightsService,
    UserService,
)


class FeedbackHub:
    """Wired set of Feedback Hub services."""

    def __init__(
        self,
        feedback_service: FeedbackService,
        insights_service: InsightsService,
        user_service: UserService,
        broadcaster: EventBroadcaster,
        environment: str = "production",
        cors_origins: Optional[List[str]] = None,
    ):
        self.feedback_service = feedback_service
        self.insights_service = insights_service
        self.user_service = user_service
        self.broadcaster = broadcaster
        self.environment = environment
        self.cors_origins = cors_origins if cors_origins is not None else ["*"]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_config(
        cls, config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None
    ) -> "FeedbackHub":
        """Build the hub from a config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary

        Returns:
            Fully wired FeedbackHub
        """
        from feedback_hub.factories.hub_factory import FeedbackHubFactory

        if not config and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            with open(config_path, "r") as f:
                if config_path.endswith(".json"):
                    config = json.load(f)
                else:
                    # Assume it's a Python file
                    spec = importlib.util.spec_from_file_location("config", config_path)
                    config_module = importlib.util.module_from_spec(spec)
                    spec.loader.exec_module(config_module)
                    config = config_module.config

        return cls(**FeedbackHubFactory.create_from_config(config))
