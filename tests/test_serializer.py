from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

import pytest

from arxivkit.query.serializer import format_stamp, stringify
from arxivkit.query.tree import (
    EMPTY,
    And,
    AndNot,
    DateInterval,
    Field,
    FieldTerm,
    Or,
    QueryNode,
    SubjectFilter,
    last_updated_in,
    submitted_in,
)

A = FieldTerm(Field.TITLE, "a")
B = FieldTerm(Field.ABSTRACT, "b")
C = FieldTerm(Field.AUTHOR, "c")
D = FieldTerm(Field.COMMENT, "d")

JAN_1 = datetime(2021, 1, 1, tzinfo=UTC)
JAN_2 = datetime(2021, 1, 2, tzinfo=UTC)


@pytest.mark.parametrize(
    ("field", "expected"),
    [
        (Field.TITLE, "ti:electron"),
        (Field.ABSTRACT, "abs:electron"),
        (Field.AUTHOR, "au:electron"),
        (Field.COMMENT, "co:electron"),
        (Field.JOURNAL_REFERENCE, "jr:electron"),
        (Field.REPORT_NUMBER, "rn:electron"),
        (Field.ANY, "all:electron"),
    ],
)
def test_field_prefixes(field, expected):
    assert stringify(FieldTerm(field, "electron")) == expected


def test_terms_are_passed_through_verbatim():
    assert stringify(FieldTerm(Field.TITLE, '"quantum criticality"')) == 'ti:"quantum criticality"'
    assert stringify(FieldTerm(Field.ABSTRACT, "$\\alpha$")) == "abs:$\\alpha$"
    assert stringify(FieldTerm(Field.JOURNAL_REFERENCE, "math*")) == "jr:math*"


def test_empty_term():
    assert stringify(FieldTerm(Field.ANY, "")) == "all:"


def test_subject():
    assert stringify(SubjectFilter("cs.LG")) == "cat:cs.LG"


def test_submitted_date_range():
    q = submitted_in((JAN_1, JAN_2))
    assert stringify(q) == "submittedDate:[202101010000+TO+202101020000]"


def test_last_updated_date_range():
    q = last_updated_in((datetime(2019, 3, 7, 9, 5, tzinfo=UTC), JAN_2))
    assert stringify(q) == "lastUpdatedDate:[201903070905+TO+202101020000]"


def test_date_range_is_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    q = submitted_in((datetime(2021, 1, 1, 2, 30, tzinfo=plus_two), JAN_2))
    assert stringify(q) == "submittedDate:[202101010030+TO+202101020000]"


def test_naive_datetimes_are_read_as_utc():
    q = submitted_in((datetime(2021, 1, 1), datetime(2021, 1, 2)))
    assert stringify(q) == "submittedDate:[202101010000+TO+202101020000]"


def test_format_stamp_truncates_to_minutes():
    assert format_stamp(datetime(2021, 12, 31, 23, 59, 59)) == "202112312359"


def test_empty():
    assert stringify(EMPTY) == ""


@pytest.mark.parametrize("x", [A, And(A, B), Or(A, AndNot(B, C))])
def test_and_or_absorb_empty(x):
    assert stringify(And(EMPTY, x)) == stringify(x)
    assert stringify(And(x, EMPTY)) == stringify(x)
    assert stringify(Or(EMPTY, x)) == stringify(x)
    assert stringify(Or(x, EMPTY)) == stringify(x)


def test_both_sides_empty():
    assert stringify(And(EMPTY, EMPTY)) == ""
    assert stringify(Or(EMPTY, EMPTY)) == ""


@pytest.mark.parametrize("x", [A, And(A, B)])
def test_and_not_absorption(x):
    assert stringify(AndNot(x, EMPTY)) == stringify(x)
    assert stringify(AndNot(EMPTY, x)) == ""


def test_leaf_operands_are_not_parenthesized():
    assert stringify(And(A, B)) == "ti:a AND abs:b"
    assert stringify(Or(A, B)) == "ti:a OR abs:b"
    assert stringify(AndNot(A, B)) == "ti:a ANDNOT abs:b"


def test_composite_operands_are_parenthesized():
    assert stringify(Or(And(A, B), C)) == "(ti:a AND abs:b) OR au:c"
    assert stringify(And(A, Or(B, C))) == "ti:a AND (abs:b OR au:c)"
    assert stringify(AndNot(Or(A, B), And(C, D))) == "(ti:a OR abs:b) ANDNOT (au:c AND co:d)"


def test_same_combinator_is_still_grouped():
    assert stringify(And(And(A, B), C)) == "(ti:a AND abs:b) AND au:c"
    assert stringify(And(A, And(B, C))) == "ti:a AND (abs:b AND au:c)"


def test_side_absorbed_to_leaf_is_not_parenthesized():
    assert stringify(And(Or(EMPTY, A), B)) == "ti:a AND abs:b"
    assert stringify(Or(AndNot(A, EMPTY), B)) == "ti:a OR abs:b"


def test_nested_empty_subtree_leaves_no_stray_operator():
    q = And(AndNot(EMPTY, A), Or(B, C))
    assert stringify(q) == "abs:b OR au:c"

    q = Or(And(EMPTY, Or(EMPTY, EMPTY)), AndNot(C, And(EMPTY, EMPTY)))
    assert stringify(q) == "au:c"


def test_outer_split_recovers_operands():
    left = And(A, B)
    right = AndNot(C, D)
    text = stringify(Or(left, right))
    assert text.split(" OR ") == [f"({stringify(left)})", f"({stringify(right)})"]
    assert text.count("(") == text.count(")") == 2


def test_differing_groupings_render_differently():
    assert stringify(And(Or(A, B), C)) != stringify(Or(A, And(B, C)))
    assert stringify(AndNot(AndNot(A, B), C)) != stringify(AndNot(A, AndNot(B, C)))


def test_deep_nesting():
    q = Or(And(A, AndNot(B, Or(C, D))), SubjectFilter("hep-th"))
    assert stringify(q) == "(ti:a AND (abs:b ANDNOT (au:c OR co:d))) OR cat:hep-th"


def test_unsupported_node_raises():
    @dataclass(frozen=True)
    class Bogus(QueryNode):
        pass

    with pytest.raises(TypeError, match="Unsupported query node"):
        stringify(And(A, Bogus()))


def test_interval_object_and_tuple_render_the_same():
    assert stringify(submitted_in(DateInterval(JAN_1, JAN_2))) == stringify(
        submitted_in((JAN_1, JAN_2))
    )


def test_stamp_pads_years_below_1000():
    q = submitted_in((datetime(999, 1, 1, tzinfo=UTC), JAN_2))
    assert stringify(q) == "submittedDate:[099901010000+TO+202101020000]"
    assert format_stamp(datetime(5, 3, 4, 6, 7)) == "000503040607"


def test_utc_shift_past_datetime_bounds_is_clamped():
    early = datetime.min.replace(tzinfo=timezone(timedelta(hours=1)))
    late = datetime.max.replace(tzinfo=timezone(timedelta(hours=-1)))
    assert stringify(submitted_in((early, late))) == (
        "submittedDate:[000101010000+TO+999912312359]"
    )
