#!/usr/bin/env python3
"""
Tests for filter composition.
"""

import pytest

from catalog_search import (
    CompositeFilter, FilterComposer, SearchRequest, StrategyNotFoundError,
    StrategyRegistry, ValidationError, compose
)
from catalog_search.search import CriterionKey, TitleMatcher


class TestIdentityFilter:
    """A request without populated fields constrains nothing."""
    
    def test_empty_request_matches_everything(self, sample_books):
        composite = compose(SearchRequest())
        assert composite.is_identity
        assert composite.to_dict() == {}
        assert composite.apply(sample_books) == sample_books
    
    def test_empty_arrays_match_everything(self, sample_books):
        composite = compose(SearchRequest(titles=[], price_bounds=[]))
        assert composite.is_identity
        assert all(composite(book) for book in sample_books)
    
    def test_identity_matches_mapping_records(self):
        assert compose(SearchRequest())({"title": "anything"})


class TestSingleField:
    """Each populated field narrows by its own semantics."""
    
    def test_titles_membership(self, sample_books):
        composite = compose(SearchRequest(titles=["SICP", "TAOCP", "Missing"]))
        assert [b.id for b in composite.apply(sample_books)] == [6, 7]
    
    def test_description_terms(self, sample_books):
        composite = compose(SearchRequest(description_terms=["Go ", "Art"]))
        assert [b.id for b in composite.apply(sample_books)] == [1, 7]
    
    def test_categories(self, sample_books):
        composite = compose(SearchRequest(category_ids=["1", "2"]))
        assert [b.id for b in composite.apply(sample_books)] == [1, 2, 4]
    
    @pytest.mark.parametrize("bounds, expected", [
        (["100"], [1, 2, 3, 4]),
        (["100", "200"], [4, 5]),
        (["100", "200", "300"], [1, 2, 3, 4, 5, 6]),
        (["200", "100"], []),
    ])
    def test_price_arity(self, sample_books, bounds, expected):
        composite = compose(SearchRequest(price_bounds=bounds))
        assert [b.id for b in composite.apply(sample_books)] == expected


class TestComposition:
    """Populated fields are AND-combined."""
    
    def test_and_of_individual_predicates(self, sample_books):
        by_author = compose(SearchRequest(authors=["Bob"]))
        by_price = compose(SearchRequest(price_bounds=["50"]))
        both = compose(SearchRequest(authors=["Bob"], price_bounds=["50"]))
        
        for book in sample_books:
            assert both(book) == (by_author(book) and by_price(book))
        assert [b.id for b in both.apply(sample_books)] == [1]
    
    def test_end_to_end_scenario(self, scenario_books):
        request = (SearchRequest.builder()
                   .titles(["Go in Action", "Go Basics"])
                   .price_bounds(["50"])
                   .build())
        composite = compose(request)
        assert [b.title for b in composite.apply(scenario_books)] == ["Go in Action", "Go Basics"]
    
    def test_conjuncts_follow_declaration_order(self):
        request = (SearchRequest.builder()
                   .category_ids(["1"])
                   .description_terms(["Go"])
                   .titles(["Go Basics"])
                   .build())
        composite = compose(request)
        assert composite.keys == [CriterionKey.TITLE, CriterionKey.DESCRIPTION, CriterionKey.CATEGORY]
    
    def test_to_dict_rendering(self):
        composite = compose(SearchRequest(titles=["A", "B"], price_bounds=["10", "20"]))
        assert composite.to_dict() == {
            "$and": [
                {"title": {"$in": ["A", "B"]}},
                {"price": {"$between": ["10", "20"]}},
            ]
        }
    
    def test_and_returns_new_filter(self):
        identity = CompositeFilter.identity()
        narrowed = identity.and_(CriterionKey.TITLE, TitleMatcher().build_predicate(["A"]))
        assert identity.is_identity
        assert not narrowed.is_identity
        assert narrowed({"title": "A"})
        assert not narrowed({"title": "B"})


class TestCompositionErrors:
    """Errors surface from compose with no partial result."""
    
    def test_invalid_category_rejected(self):
        with pytest.raises(ValidationError):
            compose(SearchRequest(titles=["A"], category_ids=["1", "two"]))
    
    def test_invalid_price_rejected(self):
        with pytest.raises(ValidationError):
            compose(SearchRequest(price_bounds=["ten"]))
    
    def test_missing_strategy_raises(self):
        composer = FilterComposer(StrategyRegistry([TitleMatcher()]))
        with pytest.raises(StrategyNotFoundError) as exc_info:
            composer.compose(SearchRequest(titles=["A"], price_bounds=["10"]))
        assert exc_info.value.key == "price"
    
    def test_missing_strategy_only_matters_when_field_populated(self):
        composer = FilterComposer(StrategyRegistry([TitleMatcher()]))
        composite = composer.compose(SearchRequest(titles=["A"]))
        assert composite.keys == [CriterionKey.TITLE]
