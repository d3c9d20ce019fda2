#!/usr/bin/env python3
"""
Catalog store for books and categories.
Persists the catalog in SQLite and evaluates composed search filters
against the hydrated records.
"""

import os
import sqlite3
from decimal import Decimal, InvalidOperation
from typing import FrozenSet, Iterable, List, Optional

from .db_helpers import with_connection, aconnect
from ..exceptions import StorageError
from ..log_manager import get_logger
from ..models import Book, Category
from ..search.composer import CompositeFilter

_BOOK_COLUMNS = """
    SELECT b.id, b.title, b.author, b.isbn, b.price, b.description, b.cover_image,
           GROUP_CONCAT(bc.category_id)
    FROM books b
    LEFT JOIN books_categories bc ON bc.book_id = b.id
"""


class CatalogStore:
    """Manages SQLite storage of the book catalog"""
    
    def __init__(self, db_path: str):
        """
        Initialize the store
        
        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = str(db_path)
        self.logger = get_logger('CatalogStore', component='store')
    
    async def initialize(self):
        """Create the database file and schema if they do not exist"""
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        
        schema_path = os.path.join(os.path.dirname(__file__), 'schema.sql')
        with open(schema_path, 'r') as f:
            schema = f.read()
        
        async with aconnect(self.db_path, writer=True) as conn:
            await conn.executescript(schema)
        self.logger.info(f"Catalog store ready at {self.db_path}")
    
    async def close(self):
        """Close database connection (no-op, connections are per operation)"""
        pass
    
    # ============================================================================
    # Categories
    # ============================================================================
    
    @with_connection(writer=True)
    async def add_category(self, conn, name: str, description: Optional[str] = None) -> Category:
        """Create a category and return it with its id"""
        try:
            cursor = await conn.execute(
                "INSERT INTO categories (name, description) VALUES (?, ?)",
                (name, description)
            )
        except sqlite3.IntegrityError as e:
            raise StorageError(f"Cannot create category '{name}': {e}") from e
        
        self.logger.info(f"Created category {cursor.lastrowid}: {name}")
        return Category(id=cursor.lastrowid, name=name, description=description)
    
    @with_connection(writer=False)
    async def list_categories(self, conn) -> List[Category]:
        """List all categories ordered by id"""
        cursor = await conn.execute(
            "SELECT id, name, description FROM categories ORDER BY id"
        )
        rows = await cursor.fetchall()
        return [Category(id=row[0], name=row[1], description=row[2]) for row in rows]
    
    # ============================================================================
    # Books
    # ============================================================================
    
    @with_connection(writer=True)
    async def add_book(self, conn, title: str, author: str, isbn: str, price,
                       description: Optional[str] = None,
                       cover_image: Optional[str] = None,
                       category_ids: Iterable[int] = ()) -> Book:
        """
        Insert a book and its category memberships
        
        Raises:
            StorageError: On an invalid price or category id, a duplicate ISBN
                or an unknown category id
        """
        price = self._parse_price(title, price)
        category_ids = self._parse_category_ids(title, category_ids)
        try:
            cursor = await conn.execute("""
                INSERT INTO books (title, author, isbn, price, description, cover_image)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (title, author, isbn, str(price), description, cover_image))
            book_id = cursor.lastrowid
            
            await conn.executemany(
                "INSERT INTO books_categories (book_id, category_id) VALUES (?, ?)",
                [(book_id, category_id) for category_id in sorted(category_ids)]
            )
        except sqlite3.IntegrityError as e:
            self.logger.error(f"Failed to add book '{title}' ({isbn}): {e}")
            raise StorageError(f"Cannot add book '{title}': {e}") from e
        
        self.logger.info(f"Added book {book_id}: {title} by {author}")
        return Book(
            id=book_id, title=title, author=author, isbn=isbn, price=price,
            description=description, cover_image=cover_image,
            category_ids=category_ids
        )
    
    @with_connection(writer=False)
    async def get_book(self, conn, book_id: int) -> Optional[Book]:
        """Get a single book by id"""
        cursor = await conn.execute(
            _BOOK_COLUMNS + " WHERE b.id = ? GROUP BY b.id", (book_id,)
        )
        row = await cursor.fetchone()
        return self._row_to_book(row) if row else None
    
    @with_connection(writer=False)
    async def list_books(self, conn) -> List[Book]:
        """List every book in the catalog ordered by id"""
        cursor = await conn.execute(_BOOK_COLUMNS + " GROUP BY b.id ORDER BY b.id")
        rows = await cursor.fetchall()
        return [self._row_to_book(row) for row in rows]
    
    async def find(self, composite: CompositeFilter) -> List[Book]:
        """
        Return the books matching a composed filter.
        
        Args:
            composite: Filter produced by FilterComposer
            
        Returns:
            Matching books ordered by id
        """
        books = await self.list_books()
        matches = composite.apply(books)
        self.logger.debug(
            f"Filter {composite.to_dict()} matched {len(matches)} of {len(books)} books"
        )
        return matches
    
    def _parse_price(self, title: str, price) -> Decimal:
        try:
            value = Decimal(str(price).strip())
        except (InvalidOperation, ValueError):
            raise StorageError(f"Cannot add book '{title}': invalid price {price!r}") from None
        if not value.is_finite():
            raise StorageError(f"Cannot add book '{title}': price must be finite, got {price!r}")
        return value
    
    def _parse_category_ids(self, title: str, category_ids: Iterable) -> FrozenSet[int]:
        try:
            return frozenset(int(c) for c in category_ids)
        except (TypeError, ValueError):
            raise StorageError(
                f"Cannot add book '{title}': category ids must be integers, got {category_ids!r}"
            ) from None
    
    def _row_to_book(self, row) -> Book:
        category_ids = frozenset(int(c) for c in row[7].split(',')) if row[7] else frozenset()
        return Book(
            id=row[0],
            title=row[1],
            author=row[2],
            isbn=row[3],
            price=Decimal(row[4]),
            description=row[5],
            cover_image=row[6],
            category_ids=category_ids
        )
