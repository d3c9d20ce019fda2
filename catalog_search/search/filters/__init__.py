"""
MongoDB-style filter expressions for catalog search.

Matchers build FilterCondition / FilterExpression nodes; a FilterBackend
converts the tree into something that can be evaluated.

Example usage:
    from catalog_search.search.filters import (
        FilterCondition, FilterExpression, FilterOperator, InMemoryFilterBackend
    )
    
    expression = FilterExpression(FilterOperator.AND, (
        FilterCondition("author", FilterOperator.IN, ("Bob",)),
        FilterCondition("price", FilterOperator.LTE, Decimal("50")),
    ))
    
    predicate = InMemoryFilterBackend().convert(expression)
    matches = [book for book in books if predicate(book)]
"""

from .base import (
    FilterOperator,
    FilterCondition,
    FilterExpression,
    FilterBackend,
    FilterError,
    UnsupportedOperatorError
)

from .memory_backend import InMemoryFilterBackend

__all__ = [
    # Core classes
    'FilterOperator',
    'FilterCondition',
    'FilterExpression',
    'FilterBackend',
    
    # Backends
    'InMemoryFilterBackend',
    
    # Errors
    'FilterError',
    'UnsupportedOperatorError'
]
