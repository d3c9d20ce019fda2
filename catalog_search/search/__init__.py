"""
Dynamic multi-field search: criterion keys, matcher strategies, the
strategy registry and the filter composer.
"""

from .criteria import CriterionKey
from .request import SearchRequest, SearchRequestBuilder
from .matchers import (
    MatcherStrategy,
    ExactMatchStrategy,
    TitleMatcher,
    AuthorMatcher,
    IsbnMatcher,
    PriceMatcher,
    DescriptionMatcher,
    CategoryMatcher,
    default_strategies
)
from .registry import StrategyRegistry, default_registry
from .composer import CompositeFilter, FilterComposer, compose

__all__ = [
    'CriterionKey',
    'SearchRequest',
    'SearchRequestBuilder',
    'MatcherStrategy',
    'ExactMatchStrategy',
    'TitleMatcher',
    'AuthorMatcher',
    'IsbnMatcher',
    'PriceMatcher',
    'DescriptionMatcher',
    'CategoryMatcher',
    'default_strategies',
    'StrategyRegistry',
    'default_registry',
    'CompositeFilter',
    'FilterComposer',
    'compose'
]
