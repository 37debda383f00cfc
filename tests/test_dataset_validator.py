import pytest

from conftest import KOI_HEADER, koi_rows
from exchron.inference.type_inference import infer_columns
from exchron.pipeline.dataset_validator import DatasetValidator, validate_dataset
from exchron.utils.exceptions import (
    DatasetValidationError,
    HeaderValidationError,
    RowConsistencyError,
)


def test_valid_dataset_has_no_errors():
    rows = koi_rows(10)
    assert validate_dataset(infer_columns(KOI_HEADER, rows), rows) == []


def test_too_few_rows():
    rows = koi_rows(9)
    errors = validate_dataset(infer_columns(KOI_HEADER, rows), rows)
    assert errors == ["Dataset must contain at least 10 rows for training"]


def test_no_target_column():
    header = ["a", "b"]
    rows = [[str(i), str(i * 2.5)] for i in range(12)]
    errors = validate_dataset(infer_columns(header, rows), rows)
    assert errors == [
        "No suitable target column found. "
        "Dataset should contain at least one categorical column."
    ]


def test_no_feature_column():
    header = ["flag", "note"]
    rows = [["true" if i % 2 else "false", f"free text {i}"] for i in range(12)]
    errors = validate_dataset(infer_columns(header, rows), rows)
    assert errors == ["Dataset must contain at least one feature column (numeric or categorical)"]


def test_all_problems_are_listed_together():
    header = ["note"]
    rows = [[f"text {i}"] for i in range(3)]
    errors = validate_dataset(infer_columns(header, rows), rows)
    assert len(errors) == 3


def test_duplicate_header_raises():
    with pytest.raises(HeaderValidationError, match=r"Duplicate column names found in header: \['a'\]"):
        DatasetValidator().validate_header(["a", "b", "a"])


def test_blank_header_name_raises():
    with pytest.raises(HeaderValidationError, match="Empty column names"):
        DatasetValidator().validate_header(["a", "", "c"])


def test_empty_header_raises():
    with pytest.raises(HeaderValidationError, match="CSV header is empty"):
        DatasetValidator().validate_header([])


def test_special_characters_only_warn():
    validator = DatasetValidator()
    validator.validate_header(["koi_period", "depth (ppm)"])
    assert validator.warnings == ["Column names contain special characters: ['depth (ppm)']"]


def test_one_mismatched_row_in_ten_warns():
    header = ["a", "b"]
    rows = [["1", "2"]] * 9 + [["1"]]
    validator = DatasetValidator()
    validator.validate_row_consistency(header, rows)
    assert validator.warnings == ["1 rows have inconsistent column count (expected: 2)"]


def test_two_mismatched_rows_in_ten_raises():
    header = ["a", "b"]
    rows = [["1", "2"]] * 8 + [["1"], ["1", "2", "3"]]
    with pytest.raises(RowConsistencyError, match=r"\(2/10\)"):
        DatasetValidator().validate_row_consistency(header, rows)


def test_mismatch_entry_reports_extra_and_missing():
    validator = DatasetValidator()
    entry = validator._build_row_mismatch_entry(5, ["a", "b", "c"], ["1"])
    assert entry["row_number"] == 5
    assert entry["missing_columns"] == ["b", "c"]
    assert entry["extra_values"] == []


def test_sparse_column_fails_ml_check():
    header = KOI_HEADER + ["sparse"]
    rows = [row + (["x"] if i < 4 else [""]) for i, row in enumerate(koi_rows(10))]
    columns = infer_columns(header, rows)

    with pytest.raises(DatasetValidationError) as exc_info:
        DatasetValidator().validate_for_ml(columns, rows)

    assert exc_info.value.errors == ["Columns with >50% missing values: sparse"]
    assert "Dataset validation failed:" in str(exc_info.value)


def test_constant_categorical_column_only_warns():
    header = KOI_HEADER + ["mission"]
    rows = [row + ["kepler"] for row in koi_rows(10)]
    columns = infer_columns(header, rows)

    validator = DatasetValidator()
    validator.validate_for_ml(columns, rows)

    assert validator.warnings == ["Columns with constant values detected: ['mission']"]
