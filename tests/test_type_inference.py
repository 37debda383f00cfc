import math

import pytest

from exchron.canonical.column import (
    CategoricalColumnMeta,
    ColumnType,
    NumericColumnMeta,
    TextColumnMeta,
)
from exchron.inference.numeric_inference import infer_numeric_stats, parse_number
from exchron.inference.type_inference import (
    infer_column_type,
    infer_columns,
    unique_in_order,
)
from exchron.standards.ingestion_limits import UNIQUE_VALUES_CAP


def test_boolean_tokens():
    assert infer_column_type(["1", "0", "true", "false"]) == ColumnType.BOOLEAN


def test_boolean_is_case_insensitive():
    assert infer_column_type(["Yes", "NO", "yes", "True"]) == ColumnType.BOOLEAN


def test_below_numeric_threshold_is_not_numeric():
    # 3 of 4 = 75% < 80%
    result = infer_column_type(["1", "2", "3", "x"])
    assert result != ColumnType.NUMERIC
    assert result in (ColumnType.CATEGORICAL, ColumnType.TEXT)


def test_numeric_tolerates_minority_of_bad_cells():
    assert infer_column_type(["1", "2", "3", "4", "n/a"]) == ColumnType.NUMERIC


def test_numeric_stats_use_population_std():
    stats = infer_numeric_stats(["1", "2", "3", "4", "5"])
    assert stats.mean == 3
    assert stats.min == 1
    assert stats.max == 5
    assert stats.std == pytest.approx(math.sqrt(2))


def test_numeric_stats_skip_unparseable_values():
    stats = infer_numeric_stats(["1", "2", "3", "4", "n/a"])
    assert stats.mean == pytest.approx(2.5)


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", "1_000", "abc", ""])
def test_parse_number_rejects(value):
    assert parse_number(value) is None


def test_parse_number_accepts_scientific_notation():
    assert parse_number("1.5e3") == 1500.0


def test_datetime_column():
    values = ["2024-01-05", "2024-02-10", "2023-12-31", "2024-03-01", "2024-03-02"]
    assert infer_column_type(values) == ColumnType.DATETIME


def test_categorical_column():
    assert infer_column_type(["a", "b", "a", "b", "a"]) == ColumnType.CATEGORICAL


def test_too_many_distinct_values_is_text():
    # 31 distinct among 40 values
    values = [f"v{i}" for i in range(31)] + ["v0"] * 9
    assert infer_column_type(values) == ColumnType.TEXT


def test_high_distinct_ratio_is_text():
    assert infer_column_type(["a", "b", "c", "a"]) == ColumnType.TEXT


def test_empty_column_is_text():
    assert infer_column_type([]) == ColumnType.TEXT
    assert infer_column_type(["", "  "]) == ColumnType.TEXT


def test_unique_values_are_capped_in_first_seen_order():
    values = [f"v{i}" for i in range(60)]
    kept = unique_in_order(values + ["v0"])
    assert len(kept) == UNIQUE_VALUES_CAP
    assert kept[:3] == ["v0", "v1", "v2"]


def test_infer_columns_is_one_to_one_with_header():
    header = ["x", "label", "note"]
    rows = [
        ["1", "a", "hello"],
        ["2", "b", ""],
        ["3", "a"],
        ["4", "b", "world"],
        ["5", "a", "again"],
    ]
    columns = infer_columns(header, rows)

    assert [c.name for c in columns] == header
    assert [c.index for c in columns] == [0, 1, 2]

    x, label, note = columns
    assert isinstance(x, NumericColumnMeta)
    assert x.stats.mean == 3
    assert isinstance(label, CategoricalColumnMeta)
    assert label.unique_values == ("a", "b")
    assert isinstance(note, TextColumnMeta)
    # blank cell and cell past the end of a short row
    assert note.missing_count == 2


def test_stats_only_on_numeric_columns():
    columns = infer_columns(["flag", "label"], [["true", "a"], ["false", "a"], ["true", "a"]])
    flag, label = columns
    assert flag.inferred_type == ColumnType.BOOLEAN
    assert "mean" not in flag.to_dict()
    assert "unique_values" not in flag.to_dict()
    assert label.to_dict()["unique_values"] == ["a"]
