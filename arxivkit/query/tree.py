# arxivkit/query/tree.py
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum


class Field(StrEnum):
    """Article field a term search is restricted to."""

    TITLE = "title"
    ABSTRACT = "abstract"
    AUTHOR = "author"
    COMMENT = "comment"
    JOURNAL_REFERENCE = "journal_reference"
    REPORT_NUMBER = "report_number"
    ANY = "any"


class DateKind(StrEnum):
    """Which version date a range applies to."""

    SUBMITTED = "submitted"
    LAST_UPDATED = "last_updated"


@dataclass(frozen=True)
class DateInterval:
    """Closed time interval. Naive datetimes are read as UTC."""

    start: datetime
    end: datetime

    @staticmethod
    def _utc(moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=UTC)
        try:
            return moment.astimezone(UTC)
        except OverflowError:
            # Shifted past the datetime range; clamp to the nearest bound.
            bound = datetime.min if moment.utcoffset() > timedelta(0) else datetime.max
            return bound.replace(tzinfo=UTC)

    @property
    def utc_start(self) -> datetime:
        return self._utc(self.start)

    @property
    def utc_end(self) -> datetime:
        return self._utc(self.end)


@dataclass(frozen=True)
class QueryNode:
    """Base AST node for arXiv search queries."""

    def __and__(self, other: "QueryNode") -> "QueryNode":
        return both(self, other)

    def __or__(self, other: "QueryNode") -> "QueryNode":
        return either(self, other)

    def __sub__(self, other: "QueryNode") -> "QueryNode":
        return first_and_not_second(self, other)

    @property
    def is_empty(self) -> bool:
        return is_vacuous(self)


@dataclass(frozen=True)
class Empty(QueryNode):
    """The query matching nothing in particular; absorbed by every combinator."""


EMPTY = Empty()


@dataclass(frozen=True)
class FieldTerm(QueryNode):
    """Term match in a single field (or any field)."""

    field: Field
    term: str


@dataclass(frozen=True)
class SubjectFilter(QueryNode):
    """Articles categorised under a subject code."""

    subject: str


@dataclass(frozen=True)
class DateRange(QueryNode):
    """Articles whose submission or last update falls in an interval."""

    kind: DateKind
    interval: DateInterval


@dataclass(frozen=True)
class And(QueryNode):
    """Logical AND of two queries."""

    left: QueryNode
    right: QueryNode


@dataclass(frozen=True)
class Or(QueryNode):
    """Logical OR of two queries."""

    left: QueryNode
    right: QueryNode


@dataclass(frozen=True)
class AndNot(QueryNode):
    """Articles matching `included` but not `excluded`."""

    included: QueryNode
    excluded: QueryNode


def is_vacuous(node: QueryNode) -> bool:
    """True if `node` absorbs down to EMPTY, i.e. renders no predicate at all."""
    match node:
        case Empty():
            return True
        case And(left=l, right=r) | Or(left=l, right=r):
            return is_vacuous(l) and is_vacuous(r)
        case AndNot(included=inc):
            return is_vacuous(inc)
        case _:
            return False


def _interval(value: DateInterval | tuple[datetime, datetime]) -> DateInterval:
    if isinstance(value, DateInterval):
        return value
    start, end = value
    return DateInterval(start, end)


# Factory functions
def term(value: str, field: Field = Field.ANY) -> FieldTerm:
    return FieldTerm(Field(field), value)


def subject(code: str) -> SubjectFilter:
    return SubjectFilter(str(code))


def submitted_in(interval: DateInterval | tuple[datetime, datetime]) -> DateRange:
    return DateRange(DateKind.SUBMITTED, _interval(interval))


def last_updated_in(interval: DateInterval | tuple[datetime, datetime]) -> DateRange:
    return DateRange(DateKind.LAST_UPDATED, _interval(interval))


# Combinators, absorbing EMPTY operands
def both(left: QueryNode, right: QueryNode) -> QueryNode:
    if left.is_empty:
        return right
    if right.is_empty:
        return left
    return And(left, right)


def either(left: QueryNode, right: QueryNode) -> QueryNode:
    if left.is_empty:
        return right
    if right.is_empty:
        return left
    return Or(left, right)


def first_and_not_second(included: QueryNode, excluded: QueryNode) -> QueryNode:
    if included.is_empty:
        return EMPTY
    if excluded.is_empty:
        return included
    return AndNot(included, excluded)
