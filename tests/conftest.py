"""
Shared pytest fixtures for catalog search tests.
"""

import os
import sys
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio

# Keep log files out of the user's home directory
os.environ.setdefault("CATALOG_SEARCH_LOG_DIR", tempfile.mkdtemp(prefix="catalog-search-logs-"))

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_search import Book, CatalogSearchAPI
from catalog_search.db import CatalogStore
from catalog_search.search.filters import FilterExpression, FilterOperator, InMemoryFilterBackend


# ============================================================================
# Record Fixtures
# ============================================================================

@pytest.fixture
def scenario_books():
    """The three-book catalog used by the end-to-end search scenario."""
    return [
        Book(id=1, title="Go in Action", author="Bob", isbn="978-1617291784",
             price=Decimal("45"), description="Hands-on Go for working programmers",
             category_ids={1}),
        Book(id=2, title="Rust Book", author="Steve", isbn="978-1718503106",
             price=Decimal("60"), description="The Rust programming language",
             category_ids={1, 2}),
        Book(id=3, title="Go Basics", author="Alice", isbn="978-0000000003",
             price=Decimal("30"), description=None,
             category_ids=set()),
    ]


@pytest.fixture
def sample_books(scenario_books):
    """A wider catalog with a spread of prices, authors and categories."""
    return scenario_books + [
        Book(id=4, title="Concurrency in Go", author="Bob", isbn="978-1491941195",
             price=Decimal("100"), description="Tools and techniques for developers",
             category_ids={2, 5}),
        Book(id=5, title="Programming Pearls", author="Jon", isbn="978-0201657883",
             price=Decimal("150.50"), description="Classic essays on programming",
             category_ids={3, 4}),
        Book(id=6, title="SICP", author="Abelson", isbn="978-0262510875",
             price=Decimal("250"), description="Structure and Interpretation",
             category_ids={3}),
        Book(id=7, title="TAOCP", author="Knuth", isbn="978-0201896831",
             price=Decimal("350"), description="The Art of Computer Programming",
             category_ids={4, 6}),
    ]


@pytest.fixture
def evaluate():
    """Evaluate a single matcher predicate against a record."""
    backend = InMemoryFilterBackend()
    
    def _evaluate(predicate, record):
        return backend.convert(FilterExpression(FilterOperator.AND, (predicate,)))(record)
    return _evaluate


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def catalog_store():
    """Provide a clean CatalogStore backed by a temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CatalogStore(str(Path(tmpdir) / "catalog.db"))
        await store.initialize()
        yield store
        await store.close()


@pytest_asyncio.fixture
async def api():
    """Provide a CatalogSearchAPI instance for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        api_instance = CatalogSearchAPI(db_path=str(Path(tmpdir) / "data" / "catalog.db"))
        await api_instance.initialize()
        yield api_instance
        await api_instance.close()


@pytest_asyncio.fixture
async def populated_api(api):
    """API with two categories and the scenario books persisted."""
    programming = await api.add_category("Programming", "General programming")
    systems = await api.add_category("Systems")
    
    await api.add_book("Go in Action", "Bob", "978-1617291784", "45",
                       description="Hands-on Go for working programmers",
                       category_ids=[programming.id])
    await api.add_book("Rust Book", "Steve", "978-1718503106", "60",
                       description="The Rust programming language",
                       category_ids=[programming.id, systems.id])
    await api.add_book("Go Basics", "Alice", "978-0000000003", "30")
    
    yield api
