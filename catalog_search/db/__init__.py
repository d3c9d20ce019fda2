"""
Database module for the catalog search engine
Handles SQLite storage of books and categories
"""

from .catalog_store import CatalogStore

__all__ = ['CatalogStore']
