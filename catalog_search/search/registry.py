"""
Strategy lookup: criterion key -> matcher strategy.
"""

import threading
from typing import Dict, Iterable, List, Optional, Union

from ..exceptions import StrategyNotFoundError
from ..log_manager import get_logger
from .criteria import CriterionKey
from .matchers import MatcherStrategy, default_strategies


class StrategyRegistry:
    """
    Static mapping from CriterionKey to the strategy that handles it.
    
    The mapping is fixed at construction time and never mutated, so one
    registry can be shared by any number of concurrent composers.
    """
    
    def __init__(self, strategies: Iterable[MatcherStrategy]):
        """
        Build the registry.
        
        Args:
            strategies: Strategy instances, at most one per key
            
        Raises:
            ValueError: If two strategies claim the same key
        """
        self.logger = get_logger('StrategyRegistry', component='search')
        mapping: Dict[CriterionKey, MatcherStrategy] = {}
        for strategy in strategies:
            if strategy.key in mapping:
                raise ValueError(
                    f"Duplicate strategy for key {strategy.key.token}: "
                    f"{mapping[strategy.key]!r} and {strategy!r}"
                )
            mapping[strategy.key] = strategy
        self._strategies = mapping
    
    def __contains__(self, key: CriterionKey) -> bool:
        return key in self._strategies
    
    def __len__(self) -> int:
        return len(self._strategies)
    
    def keys(self) -> List[CriterionKey]:
        return [key for key in CriterionKey if key in self._strategies]
    
    def resolve(self, key: Union[CriterionKey, str]) -> MatcherStrategy:
        """
        Return the strategy registered for a key.
        
        Args:
            key: CriterionKey or its string token
            
        Raises:
            StrategyNotFoundError: If the token is unknown or has no strategy
        """
        criterion = key if isinstance(key, CriterionKey) else CriterionKey.from_token(key)
        strategy = self._strategies.get(criterion) if criterion is not None else None
        if strategy is None:
            token = key.token if isinstance(key, CriterionKey) else key
            self.logger.error(f"No matcher strategy registered for key '{token}'")
            raise StrategyNotFoundError(token)
        return strategy
    
    def ensure_complete(self) -> None:
        """
        Check that every CriterionKey has a strategy.
        
        Raises:
            StrategyNotFoundError: For the first key without a strategy
        """
        for key in CriterionKey:
            if key not in self._strategies:
                self.logger.error(f"Registry incomplete: missing strategy for '{key.token}'")
                raise StrategyNotFoundError(key.token)


_default_registry: Optional[StrategyRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> StrategyRegistry:
    """
    Get the process-wide registry of built-in strategies.
    Built once on first use and checked for completeness.
    """
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                registry = StrategyRegistry(default_strategies())
                registry.ensure_complete()
                registry.logger.info(f"Registered {len(registry)} matcher strategies")
                _default_registry = registry
    return _default_registry
