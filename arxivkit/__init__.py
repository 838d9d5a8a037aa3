"""arxivkit - Composable arXiv API queries."""

from arxivkit.client import ArxivClient
from arxivkit.query import (
    ArxivQuery,
    DateInterval,
    Field,
    both,
    either,
    first_and_not_second,
    last_updated_in,
    stringify,
    subject,
    submitted_in,
    term,
)
from arxivkit.request import ArxivRequest, SearchScope, SortingCriterion, SortingOrder
from arxivkit.subjects import SUBJECTS, ArxivSubject, UnknownSubjectError, get_subject

__all__ = [
    # Query
    "ArxivQuery",
    "Field",
    "DateInterval",
    "stringify",
    "term",
    "subject",
    "submitted_in",
    "last_updated_in",
    "both",
    "either",
    "first_and_not_second",
    # Subjects
    "ArxivSubject",
    "SUBJECTS",
    "get_subject",
    "UnknownSubjectError",
    # Requests
    "ArxivRequest",
    "SearchScope",
    "SortingCriterion",
    "SortingOrder",
    "ArxivClient",
]
