"""
Catalog search API that wires the store, strategy registry and composer.
This is the main entry point for catalog searches.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .config import Config
from .db.catalog_store import CatalogStore
from .log_manager import get_logger
from .models import Book, Category
from .search import FilterComposer, SearchRequest, StrategyRegistry


class CatalogSearchAPI:
    """
    Single interface over the catalog:
    - Catalog writes and lookups (books, categories)
    - Dynamic multi-field search
    """
    
    def __init__(self, db_path: Optional[str] = None,
                 registry: Optional[StrategyRegistry] = None):
        """
        Args:
            db_path: Path to SQLite database (defaults to ~/.catalog-search/data/catalog.db)
            registry: Strategy registry (defaults to the process-wide one)
        """
        self.db_path = db_path or Config.default_db_path()
        self.store = CatalogStore(self.db_path)
        self.composer = FilterComposer(registry)
        self.logger = get_logger('CatalogSearchAPI')
    
    @classmethod
    def from_env(cls):
        """Create API instance from environment variables."""
        return cls(**Config.from_env())
    
    async def initialize(self):
        """Ensure the catalog schema exists."""
        await self.store.initialize()
    
    async def close(self):
        await self.store.close()
    
    # ============================================================================
    # Catalog
    # ============================================================================
    
    async def add_category(self, name: str, description: Optional[str] = None) -> Category:
        return await self.store.add_category(name, description)
    
    async def add_book(self, title: str, author: str, isbn: str, price,
                       description: Optional[str] = None,
                       cover_image: Optional[str] = None,
                       category_ids: Iterable[int] = ()) -> Book:
        return await self.store.add_book(
            title, author, isbn, price,
            description=description,
            cover_image=cover_image,
            category_ids=category_ids
        )
    
    async def get_book(self, book_id: int) -> Optional[Book]:
        return await self.store.get_book(book_id)
    
    # ============================================================================
    # Search
    # ============================================================================
    
    async def search(self, request: SearchRequest) -> List[Book]:
        """
        Search the catalog.
        
        Args:
            request: Raw per-field search values
            
        Returns:
            Books matching every populated field, ordered by id
            
        Raises:
            ValidationError: If a field's values cannot be interpreted
            StrategyNotFoundError: If a field has no matcher strategy
        """
        composite = self.composer.compose(request)
        books = await self.store.find(composite)
        self.logger.info(f"Search on {[k.token for k in composite.keys]} returned {len(books)} books")
        return books
    
    async def search_params(self, params: Mapping[str, Union[str, Sequence[str]]]) -> List[Book]:
        """
        Search using parsed query parameters keyed by criterion token
        (title, author, isbn, price, description, categoryIds).
        """
        return await self.search(SearchRequest.from_query_params(params))
