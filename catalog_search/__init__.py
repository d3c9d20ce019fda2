"""
Catalog Search
Dynamic multi-field search over a book catalog.
"""

from .catalog_api import CatalogSearchAPI
from .models import Book, Category
from .exceptions import CatalogSearchError, StrategyNotFoundError, ValidationError, StorageError
from .config import Config
from .search import (
    CriterionKey,
    SearchRequest,
    SearchRequestBuilder,
    CompositeFilter,
    FilterComposer,
    StrategyRegistry,
    compose
)

__version__ = "1.0.0"

__all__ = [
    "CatalogSearchAPI",
    "Book",
    "Category",
    "CatalogSearchError",
    "StrategyNotFoundError",
    "ValidationError",
    "StorageError",
    "Config",
    "CriterionKey",
    "SearchRequest",
    "SearchRequestBuilder",
    "CompositeFilter",
    "FilterComposer",
    "StrategyRegistry",
    "compose"
]
