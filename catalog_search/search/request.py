"""
Search request model and builder.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import StrategyNotFoundError
from .criteria import CriterionKey

Values = Optional[Tuple[str, ...]]
RawValues = Optional[Union[str, Iterable[str]]]


def _normalize(values: RawValues) -> Values:
    """Freeze caller-supplied values into a tuple of strings."""
    if values is None:
        return None
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class SearchRequest:
    """
    Raw search values per field. None or an empty tuple means the field
    does not constrain the search.
    
    Attributes:
        titles: Exact titles, any of which may match
        authors: Exact author names, any of which may match
        isbns: Exact ISBNs, any of which may match
        price_bounds: One to N price values (see PriceMatcher)
        description_terms: Substrings, any of which may appear in the description
        category_ids: Category identifiers as strings
    """
    titles: Values = None
    authors: Values = None
    isbns: Values = None
    price_bounds: Values = None
    description_terms: Values = None
    category_ids: Values = None
    
    def __post_init__(self):
        for name in _REQUEST_FIELDS.values():
            object.__setattr__(self, name, _normalize(getattr(self, name)))
    
    @staticmethod
    def builder() -> 'SearchRequestBuilder':
        return SearchRequestBuilder()
    
    def values_for(self, key: CriterionKey) -> Values:
        """Raw values supplied for a criterion, or None."""
        return getattr(self, _REQUEST_FIELDS[key])
    
    def fields(self) -> Iterator[Tuple[CriterionKey, Values]]:
        """Yield (key, values) for every criterion in declaration order."""
        for key in CriterionKey:
            yield key, self.values_for(key)
    
    def populated(self) -> Iterator[Tuple[CriterionKey, Tuple[str, ...]]]:
        """Yield only the criteria that carry at least one value."""
        for key, values in self.fields():
            if values:
                yield key, values
    
    def is_empty(self) -> bool:
        return not any(values for _, values in self.fields())
    
    @classmethod
    def from_query_params(cls, params: Mapping[str, Union[str, Sequence[str]]]) -> 'SearchRequest':
        """
        Build a request from parsed query parameters.
        
        Each value may be a string or a list of strings; comma-separated
        strings are split, so `price=10,20` and `price=10&price=20` are
        equivalent. Blank pieces are dropped.
        
        Args:
            params: Mapping of criterion token (e.g. "title", "categoryIds") to values
            
        Raises:
            StrategyNotFoundError: If a token names no known criterion
        """
        builder = cls.builder()
        collected = {}
        for token, raw in params.items():
            key = CriterionKey.from_token(token)
            if key is None:
                raise StrategyNotFoundError(token)
            pieces = [raw] if isinstance(raw, str) else list(raw or ())
            values = collected.setdefault(key, [])
            for piece in pieces:
                values.extend(p.strip() for p in str(piece).split(',') if p.strip())
        for key, values in collected.items():
            builder.set(key, values)
        return builder.build()


_REQUEST_FIELDS = {
    CriterionKey.TITLE: "titles",
    CriterionKey.AUTHOR: "authors",
    CriterionKey.ISBN: "isbns",
    CriterionKey.PRICE: "price_bounds",
    CriterionKey.DESCRIPTION: "description_terms",
    CriterionKey.CATEGORY: "category_ids",
}


class SearchRequestBuilder:
    """
    Fluent builder for SearchRequest. Every setter is optional and
    independent of the others.
    
    Usage:
        request = (SearchRequest.builder()
                   .authors(["Bob"])
                   .price_bounds(["50"])
                   .build())
    """
    
    def __init__(self):
        self._values = {}
    
    def set(self, key: CriterionKey, values: RawValues) -> 'SearchRequestBuilder':
        self._values[_REQUEST_FIELDS[key]] = values
        return self
    
    def titles(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.TITLE, values)
    
    def authors(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.AUTHOR, values)
    
    def isbns(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.ISBN, values)
    
    def price_bounds(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.PRICE, values)
    
    def description_terms(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.DESCRIPTION, values)
    
    def category_ids(self, values: RawValues) -> 'SearchRequestBuilder':
        return self.set(CriterionKey.CATEGORY, values)
    
    def build(self) -> SearchRequest:
        return SearchRequest(**self._values)
