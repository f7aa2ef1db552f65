# ABOUTME: Application layer for FindThatBook: the end-to-end search use case.
# ABOUTME: Ties intent extraction, catalog search, and ranking together behind BookSearch.

from findthatbook.core.search import BookSearch, SearchRequest, SearchResponse

__all__ = ["BookSearch", "SearchRequest", "SearchResponse"]
