# arxivkit/query/arxiv_query.py
from dataclasses import dataclass
from datetime import datetime
from functools import reduce
from typing import TYPE_CHECKING

import arxivkit.query.tree as nodes
from arxivkit.query.serializer import stringify
from arxivkit.query.tree import EMPTY, DateInterval, Field, QueryNode

if TYPE_CHECKING:
    from arxivkit.request import ArxivRequest, SearchScope
    from arxivkit.subjects import ArxivSubject

Interval = DateInterval | tuple[datetime, datetime]


@dataclass(frozen=True)
class ArxivQuery:
    """Search criteria for an arXiv request.

    A query is a term searched in an article field, a subject, or a date
    interval in which articles were submitted or last updated. Queries combine
    into arbitrarily complex ones with `all_of`, `any_of` and `excluding`
    (or the `&`, `|` and `-` operators).

    Examples:
        ArxivQuery.term("electron", Field.TITLE).text
        # 'ti:electron'

        ArxivQuery.all_of(
            ArxivQuery.term("electron", Field.TITLE),
            ArxivQuery.term("positron", Field.ABSTRACT),
        ).excluding(ArxivQuery.subject("hep-ex")).text
        # '(ti:electron AND abs:positron) ANDNOT cat:hep-ex'
    """

    tree: QueryNode = EMPTY

    @classmethod
    def term(cls, term: str, field: Field | str = Field.ANY) -> "ArxivQuery":
        """Articles containing `term` in `field`.

        Terms are sent verbatim: wildcards (``?``, ``*``), TeX expressions
        enclosed in ``$`` and double-quoted phrases follow the arXiv rules.
        """
        return cls(nodes.term(term, Field(field)))

    @classmethod
    def subject(cls, subject: "ArxivSubject | str") -> "ArxivQuery":
        """Articles categorised under an arXiv subject."""
        return cls(nodes.subject(str(subject)))

    @classmethod
    def submitted_in(cls, interval: Interval) -> "ArxivQuery":
        """Articles whose first version was submitted within `interval`."""
        return cls(nodes.submitted_in(interval))

    @classmethod
    def last_updated_in(cls, interval: Interval) -> "ArxivQuery":
        """Articles whose most recent version was submitted within `interval`."""
        return cls(nodes.last_updated_in(interval))

    @classmethod
    def empty(cls) -> "ArxivQuery":
        return cls(EMPTY)

    @classmethod
    def all_of(
        cls, first: "ArxivQuery", second: "ArxivQuery", *others: "ArxivQuery"
    ) -> "ArxivQuery":
        """Articles matching ALL of the subqueries."""
        return reduce(lambda acc, q: acc & q, others, first & second)

    @classmethod
    def any_of(
        cls, first: "ArxivQuery", second: "ArxivQuery", *others: "ArxivQuery"
    ) -> "ArxivQuery":
        """Articles matching ANY of the subqueries."""
        return reduce(lambda acc, q: acc | q, others, first | second)

    def excluding(self, other: "ArxivQuery") -> "ArxivQuery":
        """Articles matching this query AND NOT `other`."""
        return ArxivQuery(nodes.first_and_not_second(self.tree, other.tree))

    def __and__(self, other: "ArxivQuery") -> "ArxivQuery":
        return ArxivQuery(nodes.both(self.tree, other.tree))

    def __or__(self, other: "ArxivQuery") -> "ArxivQuery":
        return ArxivQuery(nodes.either(self.tree, other.tree))

    def __sub__(self, other: "ArxivQuery") -> "ArxivQuery":
        return self.excluding(other)

    @property
    def text(self) -> str:
        """The query in arXiv ``search_query`` syntax."""
        return stringify(self.tree)

    @property
    def is_empty(self) -> bool:
        return self.tree.is_empty

    def make_request(self, scope: "SearchScope | None" = None) -> "ArxivRequest":
        """Create a request for articles matching this query within `scope`."""
        from arxivkit.request import ArxivRequest

        return ArxivRequest.from_query(self, scope)

    def __str__(self) -> str:
        return self.text
