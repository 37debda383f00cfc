from typing import List, Sequence

from dateutil import parser as date_parser

from exchron.canonical.column import (
    BooleanColumnMeta,
    CategoricalColumnMeta,
    ColumnMeta,
    ColumnType,
    DatetimeColumnMeta,
    NumericColumnMeta,
    TextColumnMeta,
)
from exchron.inference.numeric_inference import infer_numeric_stats, parse_number
from exchron.standards.ingestion_limits import (
    BOOLEAN_TOKENS,
    CATEGORICAL_MAX_DISTINCT,
    CATEGORICAL_MAX_DISTINCT_RATIO,
    DATETIME_SHAPE_PATTERN,
    TYPE_MATCH_RATIO,
    UNIQUE_VALUES_CAP,
)


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def _is_boolean(value: str) -> bool:
    """
    Check if value represents a boolean.
    """
    return str(value).strip().lower() in BOOLEAN_TOKENS


def _is_number(value: str) -> bool:
    return parse_number(value) is not None


def _is_datetime(value: str) -> bool:
    """
    Value must parse as a date AND look like one.
    The shape check keeps bare numbers like "7" out.
    """
    v = str(value).strip()
    if not DATETIME_SHAPE_PATTERN.search(v):
        return False
    try:
        date_parser.parse(v)
        return True
    except (ValueError, OverflowError):
        return False


def _ratio(matches: int, total: int) -> float:
    return matches / total if total else 0.0


def column_values(rows: Sequence[Sequence[str]], index: int) -> List[str]:
    """
    Non-blank values of one column. Cells past the end of a
    short row count as blank.
    """
    values = []
    for row in rows:
        if index < len(row) and not _is_blank(row[index]):
            values.append(row[index])
    return values


def unique_in_order(values: Sequence[str], limit: int = UNIQUE_VALUES_CAP) -> List[str]:
    return list(dict.fromkeys(values))[:limit]


def infer_column_type(values: Sequence[str]) -> str:
    """
    Infer the semantic type of a column from its non-blank values.

    Priority (first match wins):
    BOOLEAN -> NUMERIC -> DATETIME -> CATEGORICAL -> TEXT
    """
    values = [v for v in values if not _is_blank(v)]

    if not values:
        return ColumnType.TEXT

    # BOOLEAN
    if all(_is_boolean(v) for v in values):
        return ColumnType.BOOLEAN

    total = len(values)

    # NUMERIC (tolerates a minority of malformed cells)
    numeric_count = sum(1 for v in values if _is_number(v))
    if _ratio(numeric_count, total) >= TYPE_MATCH_RATIO:
        return ColumnType.NUMERIC

    # DATETIME
    date_count = sum(1 for v in values if _is_datetime(v))
    if _ratio(date_count, total) >= TYPE_MATCH_RATIO:
        return ColumnType.DATETIME

    # CATEGORICAL
    distinct = len(set(values))
    if distinct <= CATEGORICAL_MAX_DISTINCT and distinct < total * CATEGORICAL_MAX_DISTINCT_RATIO:
        return ColumnType.CATEGORICAL

    # Default fallback
    return ColumnType.TEXT


def infer_column(name: str, index: int, rows: Sequence[Sequence[str]]) -> ColumnMeta:
    values = column_values(rows, index)
    missing_count = len(rows) - len(values)
    column_type = infer_column_type(values)

    if column_type == ColumnType.NUMERIC:
        return NumericColumnMeta(
            name=name,
            index=index,
            missing_count=missing_count,
            stats=infer_numeric_stats(values),
        )

    if column_type == ColumnType.CATEGORICAL:
        return CategoricalColumnMeta(
            name=name,
            index=index,
            missing_count=missing_count,
            unique_values=tuple(unique_in_order(values)),
        )

    if column_type == ColumnType.BOOLEAN:
        return BooleanColumnMeta(name=name, index=index, missing_count=missing_count)

    if column_type == ColumnType.DATETIME:
        return DatetimeColumnMeta(name=name, index=index, missing_count=missing_count)

    return TextColumnMeta(name=name, index=index, missing_count=missing_count)


def infer_columns(header: Sequence[str], rows: Sequence[Sequence[str]]) -> List[ColumnMeta]:
    """
    One ColumnMeta per header position, in header order.
    """
    return [infer_column(name, index, rows) for index, name in enumerate(header)]
