# arxivkit/cli.py
import asyncio
import sys
from datetime import datetime
from functools import reduce
from typing import Annotated, NoReturn

import cyclopts

from arxivkit.client import ArxivClient
from arxivkit.query import ArxivQuery, DateInterval, Field
from arxivkit.request import ArxivRequest, SearchScope, SortingCriterion, SortingOrder
from arxivkit.subjects import UnknownSubjectError, describe_subjects, get_subject

app = cyclopts.App(
    name="arxivkit",
    help="Build arXiv API search queries and requests.",
)


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _interval(label: str, start: str | None, end: str | None) -> DateInterval | None:
    """Parse an ISO-8601 pair into an interval; both bounds or neither."""
    if start is None and end is None:
        return None
    if start is None or end is None:
        _fail(f"--{label}-from and --{label}-to must be given together")
    try:
        return DateInterval(datetime.fromisoformat(start), datetime.fromisoformat(end))
    except ValueError as e:
        _fail(f"Invalid {label} date: {e}")


def _combine(queries: list[ArxivQuery], any_match: bool) -> ArxivQuery:
    if any_match:
        return reduce(lambda acc, q: acc | q, queries, ArxivQuery.empty())
    return reduce(lambda acc, q: acc & q, queries, ArxivQuery.empty())


def build_query(
    terms: dict[Field, list[str]],
    subjects: list[str],
    excluded_subjects: list[str],
    submitted: DateInterval | None = None,
    updated: DateInterval | None = None,
    any_match: bool = False,
) -> ArxivQuery:
    """Combine command line criteria into a single query.

    Every criterion is joined with AND (OR when `any_match`), then excluded
    subjects are subtracted from the result.
    """
    parts: list[ArxivQuery] = []
    for field, values in terms.items():
        parts.extend(ArxivQuery.term(value, field) for value in values)
    parts.extend(ArxivQuery.subject(get_subject(code)) for code in subjects)
    if submitted is not None:
        parts.append(ArxivQuery.submitted_in(submitted))
    if updated is not None:
        parts.append(ArxivQuery.last_updated_in(updated))

    excluded = [ArxivQuery.subject(get_subject(code)) for code in excluded_subjects]
    return _combine(parts, any_match).excluding(_combine(excluded, True))


@app.command(name="query")
def query(
    title: Annotated[
        list[str] | None, cyclopts.Parameter(name=["--title", "-t"], help="Term in title")
    ] = None,
    abstract: Annotated[
        list[str] | None, cyclopts.Parameter(name=["--abstract", "-a"], help="Term in abstract")
    ] = None,
    author: Annotated[
        list[str] | None, cyclopts.Parameter(name=["--author", "-u"], help="Term in author names")
    ] = None,
    comment: Annotated[
        list[str] | None, cyclopts.Parameter(name="--comment", help="Term in comment")
    ] = None,
    journal_ref: Annotated[
        list[str] | None,
        cyclopts.Parameter(name="--journal-ref", help="Term in journal reference"),
    ] = None,
    report_number: Annotated[
        list[str] | None,
        cyclopts.Parameter(name="--report-number", help="Term in report number"),
    ] = None,
    all_fields: Annotated[
        list[str] | None, cyclopts.Parameter(name="--all", help="Term in any field")
    ] = None,
    subject: Annotated[
        list[str] | None,
        cyclopts.Parameter(name=["--subject", "-s"], help="arXiv subject code, e.g. cs.LG"),
    ] = None,
    exclude_subject: Annotated[
        list[str] | None,
        cyclopts.Parameter(name="--exclude-subject", help="Subject code to exclude"),
    ] = None,
    submitted_from: Annotated[
        str | None, cyclopts.Parameter(name="--submitted-from", help="ISO date/time")
    ] = None,
    submitted_to: Annotated[
        str | None, cyclopts.Parameter(name="--submitted-to", help="ISO date/time")
    ] = None,
    updated_from: Annotated[
        str | None, cyclopts.Parameter(name="--updated-from", help="ISO date/time")
    ] = None,
    updated_to: Annotated[
        str | None, cyclopts.Parameter(name="--updated-to", help="ISO date/time")
    ] = None,
    any_match: Annotated[
        bool, cyclopts.Parameter(name="--any", help="Join criteria with OR instead of AND")
    ] = False,
    ids: Annotated[
        list[str] | None, cyclopts.Parameter(name="--id", help="Restrict to these arXiv IDs")
    ] = None,
    url: Annotated[
        bool, cyclopts.Parameter(name="--url", help="Print the request URL")
    ] = False,
    fetch: Annotated[
        bool, cyclopts.Parameter(name="--fetch", help="Run the request and print the Atom feed")
    ] = False,
    start: Annotated[int, cyclopts.Parameter(name="--start", help="Start index")] = 0,
    max_results: Annotated[
        int, cyclopts.Parameter(name=["--max", "-n"], help="Items per page")
    ] = 50,
    sort_by: Annotated[
        str,
        cyclopts.Parameter(
            name="--sort-by", help="relevance, lastUpdatedDate or submittedDate"
        ),
    ] = SortingCriterion.LAST_UPDATED_DATE.value,
    order: Annotated[
        str, cyclopts.Parameter(name="--order", help="ascending or descending")
    ] = SortingOrder.DESCENDING.value,
) -> None:
    """Build an arXiv search query from field criteria."""
    terms = {
        Field.TITLE: title or [],
        Field.ABSTRACT: abstract or [],
        Field.AUTHOR: author or [],
        Field.COMMENT: comment or [],
        Field.JOURNAL_REFERENCE: journal_ref or [],
        Field.REPORT_NUMBER: report_number or [],
        Field.ANY: all_fields or [],
    }
    try:
        q = build_query(
            terms,
            subject or [],
            exclude_subject or [],
            submitted=_interval("submitted", submitted_from, submitted_to),
            updated=_interval("updated", updated_from, updated_to),
            any_match=any_match,
        )
    except UnknownSubjectError as e:
        _fail(f"Unknown subject: {e.args[0]}")

    if q.is_empty and not ids:
        _fail("No search criteria given")

    if not (url or fetch):
        print(q.text)
        return

    try:
        request = (
            q.make_request(SearchScope.articles_with_ids(ids or []))
            .sorted_by(sort_by)
            .with_sorting_order(order)
            .with_start_index(start)
            .with_items_per_page(max_results)
        )
    except ValueError as e:
        _fail(str(e))

    if fetch:
        print(asyncio.run(_fetch(request)))
    else:
        print(request.url)


async def _fetch(request: ArxivRequest) -> str:
    async with ArxivClient() as client:
        return await client.fetch(request)


@app.command(name="subjects")
def subjects() -> None:
    """List every known arXiv subject code."""
    print(describe_subjects())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
