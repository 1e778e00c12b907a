"""
Tests for the FeedbackHubFactory implementation.
"""
import json
from unittest.mock import patch

import pytest

from feedback_hub.adapters.broadcast_adapter import WebSocketBroadcaster
from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.domains import ClassifierStrategy
from feedback_hub.factories.hub_factory import FeedbackHubFactory
from feedback_hub.services.feedback import FeedbackService
from feedback_hub.services.insights import InsightsService
from feedback_hub.services.user import UserService

FACTORY = "feedback_hub.factories.hub_factory"


@pytest.fixture
def basic_config():
    """Configuration without a model provider."""
    return {
        "mongo": {
            "connection_string": "mongodb://localhost:27017",
            "database": "test_db"
        }
    }


@pytest.fixture
def full_config(basic_config):
    """Configuration with every option."""
    return {
        **basic_config,
        "openai": {"api_key": "test_key", "model": "gpt-4.1-mini", "timeout": 5},
        "logfire": {"api_key": "logfire_key"},
        "environment": "development",
        "cors_origins": ["http://localhost:3000"],
    }


class TestFeedbackHubFactory:
    """Test suite for FeedbackHubFactory."""

    def test_mongo_is_required(self):
        with pytest.raises(ValueError):
            FeedbackHubFactory.create_from_config({"openai": {"api_key": "test_key"}})

    @pytest.mark.parametrize("missing", ["connection_string", "database"])
    def test_mongo_keys_are_required(self, basic_config, missing):
        del basic_config["mongo"][missing]

        with pytest.raises(ValueError):
            FeedbackHubFactory.create_from_config(basic_config)

    def test_local_strategy_without_openai(self, basic_config):
        with patch(f"{FACTORY}.MongoDBAdapter") as mock_mongo, \
                patch(f"{FACTORY}.OpenAIAdapter") as mock_llm:
            components = FeedbackHubFactory.create_from_config(basic_config)

        mock_mongo.assert_called_once_with(
            connection_string="mongodb://localhost:27017", database_name="test_db")
        mock_llm.assert_not_called()
        assert isinstance(components["feedback_service"], FeedbackService)
        assert isinstance(components["insights_service"], InsightsService)
        assert isinstance(components["user_service"], UserService)
        assert isinstance(components["broadcaster"], WebSocketBroadcaster)
        assert components["environment"] == "production"
        assert components["cors_origins"] == ["*"]
        analysis = components["feedback_service"].analysis_service
        assert analysis.strategy == ClassifierStrategy.LOCAL
        assert components["insights_service"].analysis_service is analysis

    def test_remote_strategy_with_openai(self, full_config):
        with patch(f"{FACTORY}.MongoDBAdapter"), \
                patch(f"{FACTORY}.OpenAIAdapter") as mock_llm:
            components = FeedbackHubFactory.create_from_config(full_config)

        mock_llm.assert_called_once_with(
            api_key="test_key", model="gpt-4.1-mini", timeout=5.0,
            logfire_api_key="logfire_key")
        analysis = components["feedback_service"].analysis_service
        assert analysis.strategy == ClassifierStrategy.REMOTE
        assert analysis.remote_classifier.timeout == 5.0
        assert components["environment"] == "development"
        assert components["cors_origins"] == ["http://localhost:3000"]

    def test_empty_openai_key_means_local(self, basic_config):
        basic_config["openai"] = {"api_key": ""}

        assert FeedbackHubFactory.resolve_strategy(basic_config) == ClassifierStrategy.LOCAL

    def test_logfire_requires_api_key(self, full_config):
        full_config["logfire"] = {}

        with patch(f"{FACTORY}.MongoDBAdapter"), patch(f"{FACTORY}.OpenAIAdapter"):
            with pytest.raises(ValueError):
                FeedbackHubFactory.create_from_config(full_config)


class TestFeedbackHubClient:
    def test_requires_config(self):
        with pytest.raises(ValueError):
            FeedbackHub.from_config()

    def test_from_json_file(self, tmp_path, basic_config):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(basic_config))

        with patch(f"{FACTORY}.MongoDBAdapter"):
            hub = FeedbackHub.from_config(config_path=str(config_path))

        assert hub.environment == "production"
        assert hub.is_development is False
        assert isinstance(hub.broadcaster, WebSocketBroadcaster)

    def test_from_dict(self, full_config):
        with patch(f"{FACTORY}.MongoDBAdapter"), patch(f"{FACTORY}.OpenAIAdapter"):
            hub = FeedbackHub.from_config(config=full_config)

        assert hub.is_development is True
        assert hub.insights_service.status().ai_enabled is True
