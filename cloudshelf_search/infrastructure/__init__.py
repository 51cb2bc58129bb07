"""
Infrastructure layer - catalog collaborators.
"""
from .catalog_source import ICatalogSource, InMemoryCatalogSource

__all__ = ["ICatalogSource", "InMemoryCatalogSource"]
