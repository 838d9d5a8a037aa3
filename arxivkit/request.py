# arxivkit/request.py
"""An arXiv API request: query, id list, paging, sorting."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from urllib.parse import quote, urlencode

from arxivkit.query import ArxivQuery

logger = logging.getLogger(__name__)

BASE_URL = "https://export.arxiv.org/api/query"
DEFAULT_ITEMS_PER_PAGE = 50

# '+' separates tokens in the search grammar (e.g. "[a+TO+b]") and stays literal.
_SAFE = "+"


class SortingCriterion(StrEnum):
    """Sorting criteria for returned articles."""

    RELEVANCE = "relevance"
    LAST_UPDATED_DATE = "lastUpdatedDate"
    SUBMITTED_DATE = "submittedDate"


class SortingOrder(StrEnum):
    """Sorting order for returned articles."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class SearchScope:
    """Articles a query is matched against: all of them, or only listed IDs."""

    ids: tuple[str, ...] = ()

    @classmethod
    def any_article(cls) -> "SearchScope":
        return cls()

    @classmethod
    def articles_with_ids(cls, ids: Iterable[str]) -> "SearchScope":
        """Restrict matching to these arXiv IDs (``vN`` suffix selects a version)."""
        return cls(tuple(ids))


@dataclass(frozen=True)
class ArxivRequest:
    """An arXiv API request.

    Requests are immutable; the `sorted_by`, `with_sorting_order`,
    `with_start_index` and `with_items_per_page` methods return modified copies.

    Attributes:
        query: Search criteria, or None for a request made of `id_list` only.
        id_list: Article IDs; when non-empty the search is limited to them.
        start_index: Zero-based index of the first returned article (paging).
        items_per_page: Maximum number of articles returned by a single call.
        sorting_criterion: Sort key for returned articles.
        sorting_order: Sort direction for returned articles.
    """

    query: ArxivQuery | None = None
    id_list: tuple[str, ...] = ()
    start_index: int = 0
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    sorting_criterion: SortingCriterion = SortingCriterion.LAST_UPDATED_DATE
    sorting_order: SortingOrder = SortingOrder.DESCENDING

    @classmethod
    def from_query(cls, query: ArxivQuery, scope: SearchScope | None = None) -> "ArxivRequest":
        scope = scope or SearchScope.any_article()
        return cls(query=query, id_list=scope.ids)

    @classmethod
    def from_ids(cls, ids: Iterable[str]) -> "ArxivRequest":
        return cls(id_list=tuple(ids))

    def sorted_by(self, criterion: SortingCriterion | str) -> "ArxivRequest":
        return replace(self, sorting_criterion=SortingCriterion(criterion))

    def with_sorting_order(self, order: SortingOrder | str) -> "ArxivRequest":
        return replace(self, sorting_order=SortingOrder(order))

    def with_start_index(self, index: int) -> "ArxivRequest":
        return replace(self, start_index=index)

    def with_items_per_page(self, count: int) -> "ArxivRequest":
        return replace(self, items_per_page=count)

    @property
    def params(self) -> list[tuple[str, str]]:
        """Query string parameters, in the order they appear in the URL."""
        params: list[tuple[str, str]] = []
        if self.query is not None and not self.query.is_empty:
            params.append(("search_query", self.query.text))
        if self.id_list:
            params.append(("id_list", ",".join(self.id_list)))
        params.extend(
            [
                ("sortOrder", self.sorting_order.value),
                ("sortBy", self.sorting_criterion.value),
                ("start", str(self.start_index)),
                ("max_results", str(self.items_per_page)),
            ]
        )
        return params

    @property
    def url(self) -> str:
        url = f"{BASE_URL}?{urlencode(self.params, quote_via=quote, safe=_SAFE)}"
        logger.debug("Built request URL: %s", url)
        return url
