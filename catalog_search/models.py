"""
Data models for the catalog search API.
"""

from dataclasses import dataclass, asdict, field
from decimal import Decimal
from typing import Dict, Optional, Any, FrozenSet


@dataclass(frozen=True)
class Book:
    """
    A catalog item as seen by the search engine.
    
    Attributes:
        id: Catalog identifier (None until persisted)
        title: Book title
        author: Author name
        isbn: ISBN string
        price: Unit price
        description: Optional free-text description
        cover_image: Optional cover image URL
        category_ids: Identifiers of the categories the book belongs to
    """
    id: Optional[int]
    title: str
    author: str
    isbn: str
    price: Decimal
    description: Optional[str] = None
    cover_image: Optional[str] = None
    category_ids: FrozenSet[int] = field(default_factory=frozenset)
    
    def __post_init__(self):
        """Normalize price and category ids."""
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, 'price', Decimal(str(self.price)))
        if not isinstance(self.category_ids, frozenset):
            object.__setattr__(self, 'category_ids', frozenset(self.category_ids))
    
    def to_dict(self) -> Dict[str, Any]:
        """Export as dictionary."""
        data = asdict(self)
        data['price'] = str(self.price)
        data['category_ids'] = sorted(self.category_ids)
        return data


@dataclass(frozen=True)
class Category:
    """A catalog category that books can be filed under."""
    id: Optional[int]
    name: str
    description: Optional[str] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Export as dictionary."""
        return asdict(self)
