# arxivkit/query/serializer.py
"""Render a query tree into the arXiv ``search_query`` grammar.

The arXiv grammar has no operator precedence, so every composite operand is
wrapped in parentheses while leaves never are. Empty subtrees are absorbed
bottom-up before that decision is made at each level, so no stray operator or
parenthesis survives an empty branch.
"""

import logging
from datetime import datetime
from typing import NamedTuple

from arxivkit.query.tree import (
    And,
    AndNot,
    DateKind,
    DateRange,
    Empty,
    Field,
    FieldTerm,
    Or,
    QueryNode,
    SubjectFilter,
)

logger = logging.getLogger(__name__)

FIELD_PREFIXES: dict[Field, str] = {
    Field.TITLE: "ti",
    Field.ABSTRACT: "abs",
    Field.AUTHOR: "au",
    Field.COMMENT: "co",
    Field.JOURNAL_REFERENCE: "jr",
    Field.REPORT_NUMBER: "rn",
    Field.ANY: "all",
}

DATE_PREFIXES: dict[DateKind, str] = {
    DateKind.SUBMITTED: "submittedDate",
    DateKind.LAST_UPDATED: "lastUpdatedDate",
}


class _Rendered(NamedTuple):
    text: str
    composite: bool

    def operand(self) -> str:
        return f"({self.text})" if self.composite else self.text


def format_stamp(moment: datetime) -> str:
    """Format a UTC instant as ``YYYYMMDDHHMM``."""
    return (
        f"{moment.year:04d}{moment.month:02d}{moment.day:02d}"
        f"{moment.hour:02d}{moment.minute:02d}"
    )


def _join(left: _Rendered | None, keyword: str, right: _Rendered | None) -> _Rendered | None:
    if left is None:
        return right
    if right is None:
        return left
    return _Rendered(f"{left.operand()} {keyword} {right.operand()}", True)


def _render(node: QueryNode) -> _Rendered | None:
    match node:
        case Empty():
            return None
        case FieldTerm(field=f, term=t):
            return _Rendered(f"{FIELD_PREFIXES[f]}:{t}", False)
        case SubjectFilter(subject=s):
            return _Rendered(f"cat:{s}", False)
        case DateRange(kind=k, interval=i):
            start = format_stamp(i.utc_start)
            end = format_stamp(i.utc_end)
            return _Rendered(f"{DATE_PREFIXES[k]}:[{start}+TO+{end}]", False)
        case And(left=l, right=r):
            return _join(_render(l), "AND", _render(r))
        case Or(left=l, right=r):
            return _join(_render(l), "OR", _render(r))
        case AndNot(included=inc, excluded=exc):
            included = _render(inc)
            if included is None:
                return None
            return _join(included, "ANDNOT", _render(exc))
        case _:
            raise TypeError(f"Unsupported query node: {node!r}")


def stringify(node: QueryNode) -> str:
    """Convert a query tree to arXiv query syntax ("" for an empty query)."""
    rendered = _render(node)
    text = rendered.text if rendered is not None else ""
    logger.debug("Rendered query: %s", text)
    return text
