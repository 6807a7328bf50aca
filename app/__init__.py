"""
Saved Searches API - owner-scoped saved search storage with usage tracking.

This package provides a FastAPI-based backend that stores named, opaque
search payloads per user and records how often each one is used.
"""

__version__ = "1.0.0"
