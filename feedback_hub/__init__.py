"""
Feedback Hub - feedback collection with automatic analysis.

This package stores user feedback, classifies every submission, serves
a role-scoped HTTP API and pushes lifecycle events to live dashboards.
"""

__version__ = "0.1.0"

from feedback_hub.client.feedback_hub import FeedbackHub  # noqa: E402
from feedback_hub.factories.hub_factory import FeedbackHubFactory  # noqa: E402

__all__ = ["FeedbackHub", "FeedbackHubFactory", "__version__"]
