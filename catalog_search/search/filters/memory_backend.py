#!/usr/bin/env python3
"""
In-memory backend for catalog filters.
Compiles FilterExpression trees into plain Python predicates over records.
"""

from collections.abc import Mapping
from typing import Any, Callable, Union

from .base import (
    FilterBackend, FilterCondition, FilterExpression,
    FilterOperator, UnsupportedOperatorError
)

Predicate = Callable[[Any], bool]

_COLLECTION_TYPES = (set, frozenset, list, tuple)


def _always(_record) -> bool:
    return True


def _never(_record) -> bool:
    return False


class InMemoryFilterBackend(FilterBackend):
    """
    Converts FilterExpression trees to callables `record -> bool`.
    Records may be objects (attribute access) or mappings (key access).
    """
    
    SUPPORTED_OPERATORS = set(FilterOperator)
    
    def convert(self, expression: FilterExpression) -> Predicate:
        """
        Convert FilterExpression to a predicate.
        
        Args:
            expression: The filter expression tree
            
        Returns:
            Callable returning True for matching records
        """
        if expression.operator == FilterOperator.AND and not expression.conditions:
            return _always
        
        self.validate_expression(expression)
        return self._convert_node(expression)
    
    def supports_operator(self, operator: FilterOperator) -> bool:
        return operator in self.SUPPORTED_OPERATORS
    
    def _convert_node(self, node: Union[FilterExpression, FilterCondition]) -> Predicate:
        if isinstance(node, FilterCondition):
            return self._convert_condition(node)
        elif isinstance(node, FilterExpression):
            return self._convert_compound(node)
        else:
            raise ValueError(f"Unknown expression type: {type(node)}")
    
    def _convert_compound(self, expr: FilterExpression) -> Predicate:
        """Convert compound expression (AND/OR)."""
        parts = [self._convert_node(c) for c in expr.conditions]
        
        if expr.operator == FilterOperator.AND:
            if not parts:
                return _always
            return lambda record: all(p(record) for p in parts)
        
        elif expr.operator == FilterOperator.OR:
            if not parts:
                return _never
            return lambda record: any(p(record) for p in parts)
        
        raise UnsupportedOperatorError(expr.operator, self.__class__.__name__)
    
    def _convert_condition(self, condition: FilterCondition) -> Predicate:
        """Convert a single condition to a predicate."""
        field = condition.field
        op = condition.operator
        value = condition.value
        
        if op == FilterOperator.EQ:
            return lambda record: _get_field(record, field) == value
        
        elif op == FilterOperator.IN:
            return self._build_in(field, value)
        
        elif op == FilterOperator.LTE:
            return lambda record: _compare(_get_field(record, field), lambda v: v <= value)
        
        elif op == FilterOperator.GTE:
            return lambda record: _compare(_get_field(record, field), lambda v: v >= value)
        
        elif op == FilterOperator.BETWEEN:
            return self._build_between(field, value)
        
        elif op == FilterOperator.CONTAINS:
            return self._build_contains(field, value)
        
        raise UnsupportedOperatorError(op, self.__class__.__name__)
    
    def _build_in(self, field: str, values: Any) -> Predicate:
        """Membership; on a collection-valued field, any shared element matches."""
        if not isinstance(values, _COLLECTION_TYPES):
            values = [values]
        candidates = frozenset(values)
        
        def predicate(record) -> bool:
            actual = _get_field(record, field)
            if actual is None:
                return False
            if isinstance(actual, _COLLECTION_TYPES):
                return not candidates.isdisjoint(actual)
            return actual in candidates
        
        return predicate
    
    def _build_between(self, field: str, bounds: Any) -> Predicate:
        """Inclusive range; bounds are used in the order given."""
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ValueError("$between requires exactly 2 values")
        low, high = bounds
        return lambda record: _compare(_get_field(record, field), lambda v: low <= v <= high)
    
    def _build_contains(self, field: str, fragment: Any) -> Predicate:
        """Case-sensitive substring (or element) containment."""
        def predicate(record) -> bool:
            actual = _get_field(record, field)
            if actual is None:
                return False
            return fragment in actual
        
        return predicate


def _get_field(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def _compare(actual: Any, test: Callable[[Any], bool]) -> bool:
    if actual is None:
        return False
    return test(actual)
