from feedback_hub.interfaces.providers.data_storage import DataStorageProvider
from feedback_hub.interfaces.providers.llm import LLMProvider
from feedback_hub.interfaces.providers.broadcast import EventBroadcaster

__all__ = ["DataStorageProvider", "LLMProvider", "EventBroadcaster"]
