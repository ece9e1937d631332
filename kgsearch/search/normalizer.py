"""
Result Normalizer
=================

Coerces raw graph rows into SearchResult.

The same logical field can arrive in different representations depending
on the backend and on how the node was seeded:

- numbers: int/float, Decimal or numpy scalars, objects exposing
  ``to_number()``, numeral strings
- dates: ``datetime``/``date``, driver temporal types exposing
  ``iso_format()``/``isoformat()``, plain strings
"""

import math
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from kgsearch.search.models import MatchType, SearchResult


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0


def to_number(value: Any) -> float:
    """
    Coerce a backend value to a finite number.

    - bool/int/float: used as-is
    - object with a ``to_number()`` accessor: the accessor's value
    - object supporting ``float()`` (Decimal, numpy): converted
    - string: parsed as int, then as float
    - anything else, or a failed parse: 0

    Examples:
        >>> to_number("42")
        42
        >>> to_number("not-a-number")
        0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _finite(value)
    if value is None:
        return 0

    accessor = getattr(value, "to_number", None)
    if callable(accessor):
        return to_number(accessor())

    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        text = text.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return _finite(float(text))
        except ValueError:
            return 0

    if hasattr(value, "__float__"):
        try:
            return _finite(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0

    return 0


def to_date_string(value: Any) -> str:
    """
    Coerce a backend date value to a string.

    - None or empty: ""
    - datetime/date: ISO-8601
    - driver temporal types: their ISO formatter
    - string: unchanged
    - anything else: ``str(value)``
    """
    if value is None or value == "":
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, str):
        return value

    for formatter in ("iso_format", "isoformat"):
        method = getattr(value, formatter, None)
        if callable(method):
            return str(method())

    return str(value)


def _optional_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    return to_number(value)


def _string(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_string(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _string_list(value: Any) -> List[str]:
    if not value:
        return []
    return [str(item) for item in value if item is not None]


def _optional_string_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    return _string_list(value)


def normalize_record(
    row: Mapping[str, Any],
    match_type: MatchType = MatchType.TEMPLATE
) -> SearchResult:
    """
    Build a SearchResult from one raw row.

    Args:
        row: Record keyed by column alias
        match_type: Provenance tag supplied by the caller

    Returns:
        SearchResult with defaults for every missing field
    """
    code_snippets = row.get("codeSnippets")

    return SearchResult(
        id=_string(row.get("id")),
        title=_string(row.get("title")),
        description=_string(row.get("description")),
        role=_string(row.get("role")),
        impact=_optional_string(row.get("impact")),
        completed_date=to_date_string(row.get("completedDate")),
        complexity=_optional_number(row.get("complexity")),
        file_count=_optional_number(row.get("fileCount")),
        live_url=_optional_string(row.get("liveUrl")),
        github_url=_optional_string(row.get("githubUrl")),
        technologies=_string_list(row.get("technologies")),
        skills=_string_list(row.get("skills")),
        patterns=_string_list(row.get("patterns")),
        code_snippets=list(code_snippets) if code_snippets is not None else None,
        company=_optional_string(row.get("company")),
        position=_optional_string(row.get("position")),
        achievements=_optional_string_list(row.get("achievements")),
        score=to_number(row.get("score")),
        match_type=match_type,
        result_type=_string(row.get("resultType")) or "project",
    )
