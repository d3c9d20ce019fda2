#!/usr/bin/env python3
"""
Backend-agnostic filter expression tree.
Matchers describe their predicates with these nodes; a backend turns the
tree into something executable (an in-memory predicate, a store query, ...).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Union

from ...exceptions import CatalogSearchError


class FilterOperator(Enum):
    """MongoDB-style operators understood by the catalog filters."""
    # Comparison
    EQ = "$eq"
    LTE = "$lte"
    GTE = "$gte"
    BETWEEN = "$between"
    
    # Membership
    IN = "$in"
    CONTAINS = "$contains"
    
    # Logical
    AND = "$and"
    OR = "$or"


@dataclass(frozen=True)
class FilterCondition:
    """
    Represents a single field-level condition.
    """
    field: str
    operator: FilterOperator
    value: Any
    
    def to_dict(self) -> Dict[str, Any]:
        return {self.field: {self.operator.value: _render_value(self.value)}}
    
    def __repr__(self):
        return f"{self.field} {self.operator.value} {self.value}"


@dataclass(frozen=True)
class FilterExpression:
    """
    Represents a compound filter node (AND / OR) over conditions and
    nested expressions. An AND with no conditions matches everything;
    an OR with no conditions matches nothing.
    """
    operator: FilterOperator
    conditions: tuple = ()
    
    def is_compound(self) -> bool:
        """Check if this is a compound expression (AND/OR)."""
        return self.operator in {FilterOperator.AND, FilterOperator.OR}
    
    def is_empty(self) -> bool:
        return not self.conditions
    
    def and_(self, other: Union[FilterCondition, 'FilterExpression']) -> 'FilterExpression':
        """Return a new AND expression with `other` appended as a conjunct."""
        if self.operator != FilterOperator.AND:
            return FilterExpression(FilterOperator.AND, (self, other))
        return FilterExpression(FilterOperator.AND, self.conditions + (other,))
    
    def to_dict(self) -> Dict[str, Any]:
        """Render as a MongoDB-style filter dictionary."""
        if self.operator == FilterOperator.AND and not self.conditions:
            return {}
        return {self.operator.value: [c.to_dict() for c in self.conditions]}
    
    def __repr__(self):
        return f"{self.operator.value}({list(self.conditions)})"


def _render_value(value: Any) -> Any:
    """Make condition values readable in a dict rendering."""
    if isinstance(value, (set, frozenset)):
        return sorted(_render_value(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_render_value(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    return value


class FilterBackend(ABC):
    """
    Abstract base class for filter backends.
    Each backend converts FilterExpression trees into its native form.
    """
    
    @abstractmethod
    def convert(self, expression: FilterExpression) -> Any:
        """
        Convert a FilterExpression tree to the backend's native format.
        
        Args:
            expression: The filter expression tree
            
        Returns:
            Backend-specific query object
        """
        pass
    
    @abstractmethod
    def supports_operator(self, operator: FilterOperator) -> bool:
        """Check if this backend supports a specific operator."""
        pass
    
    def validate_expression(self, expression: FilterExpression) -> None:
        """
        Validate that all operators in the expression are supported.
        
        Raises:
            UnsupportedOperatorError: If an unsupported operator is found
        """
        self._validate_recursive(expression)
    
    def _validate_recursive(self, expr: Union[FilterExpression, FilterCondition]) -> None:
        """Recursively validate all operators."""
        if not self.supports_operator(expr.operator):
            raise UnsupportedOperatorError(expr.operator, self.__class__.__name__)
        if isinstance(expr, FilterExpression):
            for condition in expr.conditions:
                self._validate_recursive(condition)


class FilterError(CatalogSearchError):
    """Base exception for filter-related errors."""
    pass


class UnsupportedOperatorError(FilterError):
    """Raised when a backend doesn't support an operator."""
    def __init__(self, operator: FilterOperator, backend: str):
        super().__init__(f"Operator {operator.value} is not supported by {backend}")
        self.operator = operator
        self.backend = backend

