"""
Field matcher strategies.

Each strategy turns the raw string values supplied for one criterion into
a filter node over Book records. Strategies hold no state and are shared
by every request in the process.
"""

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import FrozenSet, List, Sequence, Union

from ..exceptions import ValidationError
from .criteria import CriterionKey
from .filters import FilterCondition, FilterExpression, FilterOperator

Predicate = Union[FilterCondition, FilterExpression]


class MatcherStrategy(ABC):
    """
    Builds the predicate for a single criterion.
    
    Subclasses set `key` and implement `build_predicate`. Callers guarantee
    that `params` is non-empty.
    """
    
    key: CriterionKey = None
    
    @property
    def field(self) -> str:
        return self.key.field_name
    
    @abstractmethod
    def build_predicate(self, params: Sequence[str]) -> Predicate:
        """
        Build the filter node for the given raw values.
        
        Args:
            params: Non-empty sequence of raw string values
            
        Returns:
            FilterCondition or FilterExpression over Book records
            
        Raises:
            ValidationError: If a value cannot be interpreted for this field
        """
        pass
    
    def __repr__(self):
        return f"{self.__class__.__name__}(key={self.key.token!r})"


class ExactMatchStrategy(MatcherStrategy):
    """Matches when the field equals any of the supplied values."""
    
    def build_predicate(self, params: Sequence[str]) -> Predicate:
        return FilterCondition(self.field, FilterOperator.IN, tuple(params))


class TitleMatcher(ExactMatchStrategy):
    key = CriterionKey.TITLE


class AuthorMatcher(ExactMatchStrategy):
    key = CriterionKey.AUTHOR


class IsbnMatcher(ExactMatchStrategy):
    key = CriterionKey.ISBN


class DescriptionMatcher(MatcherStrategy):
    """Matches when the description contains any of the fragments (case-sensitive)."""
    
    key = CriterionKey.DESCRIPTION
    
    def build_predicate(self, params: Sequence[str]) -> Predicate:
        return FilterExpression(
            FilterOperator.OR,
            tuple(FilterCondition(self.field, FilterOperator.CONTAINS, p) for p in params)
        )


class CategoryMatcher(MatcherStrategy):
    """Matches when the book belongs to at least one of the given category ids."""
    
    key = CriterionKey.CATEGORY
    
    def build_predicate(self, params: Sequence[str]) -> Predicate:
        ids = self._parse_ids(params)
        return FilterCondition(self.field, FilterOperator.IN, ids)
    
    def _parse_ids(self, params: Sequence[str]) -> FrozenSet[int]:
        ids = set()
        for token in params:
            try:
                ids.add(int(token))
            except (TypeError, ValueError):
                raise ValidationError(
                    self.key.token, token,
                    f"Category id must be an integer, got {token!r}"
                ) from None
        return frozenset(ids)


class PriceMatcher(MatcherStrategy):
    """
    Price range matcher. The number of values decides the bounds:
    
    - one value: price <= value
    - two values: first <= price <= second, as given (an inverted pair
      matches nothing)
    - three or more: price <= last value; the others are ignored
    """
    
    key = CriterionKey.PRICE
    
    def build_predicate(self, params: Sequence[str]) -> Predicate:
        if len(params) == 2:
            low, high = self._parse(params[0]), self._parse(params[1])
            return FilterCondition(self.field, FilterOperator.BETWEEN, (low, high))
        return FilterCondition(self.field, FilterOperator.LTE, self._parse(params[-1]))
    
    def _parse(self, token: str) -> Decimal:
        try:
            value = Decimal(token.strip())
        except (AttributeError, InvalidOperation, ValueError):
            raise ValidationError(
                self.key.token, token, f"Price must be a decimal number, got {token!r}"
            ) from None
        if not value.is_finite():
            raise ValidationError(
                self.key.token, token, f"Price must be a finite number, got {token!r}"
            )
        return value


def default_strategies() -> List[MatcherStrategy]:
    """One instance of every built-in strategy, in criterion order."""
    return [
        TitleMatcher(),
        AuthorMatcher(),
        IsbnMatcher(),
        PriceMatcher(),
        DescriptionMatcher(),
        CategoryMatcher(),
    ]
