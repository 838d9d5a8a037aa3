from arxivkit.query.arxiv_query import ArxivQuery
from arxivkit.query.serializer import stringify
from arxivkit.query.tree import (
    DateInterval,
    DateKind,
    Field,
    both,
    either,
    first_and_not_second,
    is_vacuous,
    last_updated_in,
    subject,
    submitted_in,
    term,
)

__all__ = [
    "ArxivQuery",
    "stringify",
    "Field",
    "DateKind",
    "DateInterval",
    # Factory functions
    "term",
    "subject",
    "submitted_in",
    "last_updated_in",
    "is_vacuous",
    # Combinators
    "both",
    "either",
    "first_and_not_second",
]
