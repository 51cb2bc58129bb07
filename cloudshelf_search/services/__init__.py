"""
Service layer - search orchestration.
"""
from .search_controller import SearchController

__all__ = ["SearchController"]
