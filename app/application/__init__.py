"""Application layer entry points.

Holds use-case services that coordinate domain logic with adapters.

Note: Services are imported directly from their modules to avoid circular imports.
Use:
    from app.application.saved_search_service import SavedSearchApplicationService
"""
