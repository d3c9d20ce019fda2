#!/usr/bin/env python3
"""
Tests for SearchRequest construction and query-parameter parsing.
"""

import dataclasses

import pytest

from catalog_search import SearchRequest, StrategyNotFoundError
from catalog_search.search import CriterionKey


class TestSearchRequestBuilder:
    """Test the fluent builder."""
    
    def test_empty_builder(self):
        request = SearchRequest.builder().build()
        assert request.is_empty()
        assert all(values is None for _, values in request.fields())
    
    def test_fields_are_independent(self):
        request = (SearchRequest.builder()
                   .price_bounds(["50"])
                   .authors(["Bob"])
                   .build())
        assert request.authors == ("Bob",)
        assert request.price_bounds == ("50",)
        assert request.titles is None
        assert not request.is_empty()
    
    def test_lists_are_copied(self):
        titles = ["Go Basics"]
        request = SearchRequest.builder().titles(titles).build()
        titles.append("Rust Book")
        assert request.titles == ("Go Basics",)
    
    def test_single_string_is_one_value(self):
        request = SearchRequest(isbns="978-1")
        assert request.isbns == ("978-1",)
    
    def test_request_is_immutable(self):
        request = SearchRequest(titles=["A"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.titles = ("B",)
    
    def test_empty_arrays_mean_no_constraint(self):
        request = SearchRequest(titles=[], category_ids=())
        assert request.is_empty()
        assert list(request.populated()) == []
    
    def test_fields_in_declaration_order(self):
        request = SearchRequest(category_ids=["1"], titles=["A"], price_bounds=["5"])
        assert [key for key, _ in request.populated()] == [
            CriterionKey.TITLE, CriterionKey.PRICE, CriterionKey.CATEGORY
        ]


class TestFromQueryParams:
    """Test parsing of raw query parameters."""
    
    def test_tokens_map_to_fields(self):
        request = SearchRequest.from_query_params({
            "title": ["Go Basics"],
            "author": "Bob",
            "isbn": ["978-1"],
            "price": ["10", "20"],
            "description": ["Go"],
            "categoryIds": ["1", "2"],
        })
        assert request.titles == ("Go Basics",)
        assert request.authors == ("Bob",)
        assert request.isbns == ("978-1",)
        assert request.price_bounds == ("10", "20")
        assert request.description_terms == ("Go",)
        assert request.category_ids == ("1", "2")
    
    def test_comma_separated_values_are_split(self):
        request = SearchRequest.from_query_params({"price": "10, 20", "categoryIds": ["1,2", "3"]})
        assert request.price_bounds == ("10", "20")
        assert request.category_ids == ("1", "2", "3")
    
    def test_blank_values_dropped(self):
        request = SearchRequest.from_query_params({"title": ["", " "], "author": ""})
        assert request.is_empty()
    
    def test_unknown_token_raises(self):
        with pytest.raises(StrategyNotFoundError) as exc_info:
            SearchRequest.from_query_params({"title": "A", "publisher": "O'Reilly"})
        assert exc_info.value.key == "publisher"
