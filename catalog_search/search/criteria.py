"""
The closed vocabulary of filterable catalog fields.
"""

from enum import Enum
from typing import Optional


class CriterionKey(Enum):
    """
    Filterable fields and the string tokens used to request them.
    
    Declaration order is the order in which the composer applies them.
    """
    TITLE = "title"
    AUTHOR = "author"
    ISBN = "isbn"
    PRICE = "price"
    DESCRIPTION = "description"
    CATEGORY = "categoryIds"
    
    @property
    def token(self) -> str:
        return self.value
    
    @property
    def field_name(self) -> str:
        """Name of the Book attribute this criterion filters on."""
        return _FIELD_NAMES[self]
    
    @classmethod
    def from_token(cls, value: str) -> Optional['CriterionKey']:
        """Convert a string token to a key, or None if unknown."""
        for key in cls:
            if key.value == value:
                return key
        return None


_FIELD_NAMES = {
    CriterionKey.TITLE: "title",
    CriterionKey.AUTHOR: "author",
    CriterionKey.ISBN: "isbn",
    CriterionKey.PRICE: "price",
    CriterionKey.DESCRIPTION: "description",
    CriterionKey.CATEGORY: "category_ids",
}
