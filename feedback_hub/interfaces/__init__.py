"""
Abstract interfaces for Feedback Hub.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for storage, language model and push channel adapters
- Repository interfaces for data access
- Service interfaces for business logic components
"""
