"""
Filter composer: turns a SearchRequest into one CompositeFilter.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import StrategyNotFoundError, ValidationError
from ..log_manager import get_logger, log_with_context
from .criteria import CriterionKey
from .filters import FilterExpression, FilterOperator, InMemoryFilterBackend
from .matchers import Predicate
from .registry import StrategyRegistry, default_registry
from .request import SearchRequest


class CompositeFilter:
    """
    AND-conjunction of per-field predicates.
    
    A filter without conjuncts is the identity and matches every record.
    Instances are immutable; `and_` returns a new filter.
    """
    
    _backend = InMemoryFilterBackend()
    
    def __init__(self, conjuncts: Iterable[Tuple[CriterionKey, Predicate]] = ()):
        self._conjuncts = tuple(conjuncts)
        self._expression = FilterExpression(
            FilterOperator.AND, tuple(predicate for _, predicate in self._conjuncts)
        )
        self._predicate = self._backend.convert(self._expression)
    
    @classmethod
    def identity(cls) -> 'CompositeFilter':
        return cls()
    
    def and_(self, key: CriterionKey, predicate: Predicate) -> 'CompositeFilter':
        """Return a new filter with one more conjunct."""
        return CompositeFilter(self._conjuncts + ((key, predicate),))
    
    @property
    def expression(self) -> FilterExpression:
        return self._expression
    
    @property
    def conjuncts(self) -> Tuple[Tuple[CriterionKey, Predicate], ...]:
        return self._conjuncts
    
    @property
    def keys(self) -> List[CriterionKey]:
        return [key for key, _ in self._conjuncts]
    
    @property
    def is_identity(self) -> bool:
        return not self._conjuncts
    
    def matches(self, record: Any) -> bool:
        return self._predicate(record)
    
    __call__ = matches
    
    def apply(self, records: Iterable[Any]) -> List[Any]:
        """Return the records that satisfy every conjunct, in input order."""
        return [record for record in records if self._predicate(record)]
    
    def to_dict(self) -> Dict[str, Any]:
        """MongoDB-style rendering, for diagnostics."""
        return self._expression.to_dict()
    
    def __repr__(self):
        return f"CompositeFilter({self._expression!r})"


class FilterComposer:
    """
    Composes a CompositeFilter from a SearchRequest.
    
    Fields are visited in CriterionKey order; every populated field
    contributes exactly one conjunct, empty ones contribute nothing.
    Composition is a pure function of the request and the registry.
    """
    
    def __init__(self, registry: Optional[StrategyRegistry] = None):
        """
        Args:
            registry: Strategy registry (defaults to the process-wide one)
        """
        self.registry = registry or default_registry()
        self.logger = get_logger('FilterComposer', component='search')
    
    def compose(self, request: SearchRequest) -> CompositeFilter:
        """
        Build the composite filter for a request.
        
        Raises:
            StrategyNotFoundError: If a populated field has no strategy
            ValidationError: If a field's values cannot be interpreted
        """
        composite = CompositeFilter.identity()
        
        for key, values in request.populated():
            try:
                strategy = self.registry.resolve(key)
                composite = composite.and_(key, strategy.build_predicate(values))
            except ValidationError as e:
                log_with_context(self.logger, logging.WARNING, f"Rejected search request: {e}",
                                 {"field": e.field, "value": e.value})
                raise
            except StrategyNotFoundError:
                self.logger.error(f"Cannot compose filter: no strategy for '{key.token}'")
                raise
        
        self.logger.debug(f"Composed filter over {[k.token for k in composite.keys]}: "
                          f"{composite.to_dict()}")
        return composite


def compose(request: SearchRequest) -> CompositeFilter:
    """Compose a request against the process-wide registry."""
    return FilterComposer().compose(request)
