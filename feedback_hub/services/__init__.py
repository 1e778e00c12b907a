"""
Service implementations for Feedback Hub.

These services implement the business logic interfaces defined in
feedback_hub.interfaces.services.
"""
