"""
HTTP and WebSocket surface of Feedback Hub.
"""
from feedback_hub.api.app import create_app

__all__ = ["create_app"]
