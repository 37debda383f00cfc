from typing import Dict, List, Sequence

from exchron.canonical.column import CategoricalColumnMeta, ColumnMeta
from exchron.observability.logger import log_event
from exchron.standards.ingestion_limits import (
    MAX_MISSING_RATIO,
    MIN_TRAINING_ROWS,
    ROW_MISMATCH_PREVIEW,
    ROW_MISMATCH_TOLERANCE,
    SAFE_COLUMN_NAME_PATTERN,
)
from exchron.utils.exceptions import (
    DatasetValidationError,
    HeaderValidationError,
    RowConsistencyError,
)


# ------------------------------------------------------------------
# Lenient check (used by the UI to list problems)
# ------------------------------------------------------------------

def validate_dataset(columns: Sequence[ColumnMeta], rows: Sequence[Sequence[str]]) -> List[str]:
    """
    Return human-readable ML-readiness problems; empty means valid.
    """
    errors: List[str] = []

    if len(rows) < MIN_TRAINING_ROWS:
        errors.append(f"Dataset must contain at least {MIN_TRAINING_ROWS} rows for training")

    if not any(col.is_target_candidate for col in columns):
        errors.append(
            "No suitable target column found. "
            "Dataset should contain at least one categorical column."
        )

    if not any(col.is_feature_candidate for col in columns):
        errors.append("Dataset must contain at least one feature column (numeric or categorical)")

    return errors


class DatasetValidator:
    """
    Strict checks run while ingesting an uploaded CSV.

    This class:
    - NEVER mutates rows
    - Raises on the first failing stage
    - Collects soft warnings in `warnings`
    """

    def __init__(self, dataset_name: str = "dataset.csv"):
        self.dataset_name = dataset_name
        self.warnings: List[str] = []

    def _warn(self, message: str, **details):
        self.warnings.append(message)
        log_event("DATASET_WARNING", {
            "dataset": self.dataset_name,
            "message": message,
            **details,
        })

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def validate_header(self, header: Sequence[str]):
        if not header:
            raise HeaderValidationError("CSV header is empty")

        if len(set(header)) != len(header):
            seen = set()
            duplicates = []
            for name in header:
                if name in seen and name not in duplicates:
                    duplicates.append(name)
                seen.add(name)
            raise HeaderValidationError(
                f"Duplicate column names found in header: {duplicates}"
            )

        if any(not name or not name.strip() for name in header):
            raise HeaderValidationError("Empty column names found in header")

        special = [name for name in header if not SAFE_COLUMN_NAME_PATTERN.match(name)]
        if special:
            self._warn(
                f"Column names contain special characters: {special}",
                columns=special,
            )

    # ------------------------------------------------------------------
    # Row width
    # ------------------------------------------------------------------

    def _build_row_mismatch_entry(self, row_num: int, header: Sequence[str], row: Sequence[str]) -> Dict:
        return {
            "row_number": row_num,  # 1-based, header is row 1
            "expected_columns": len(header),
            "actual_columns": len(row),
            "extra_values": list(row[len(header):]),
            "missing_columns": list(header[len(row):]),
        }

    def validate_row_consistency(self, header: Sequence[str], rows: Sequence[Sequence[str]]):
        expected = len(header)
        mismatches = [
            self._build_row_mismatch_entry(i + 2, header, row)
            for i, row in enumerate(rows)
            if len(row) != expected
        ]

        if not mismatches:
            return

        if len(mismatches) > len(rows) * ROW_MISMATCH_TOLERANCE:
            raise RowConsistencyError(
                f"Too many rows with inconsistent column count "
                f"({len(mismatches)}/{len(rows)}). Please check CSV format."
            )

        self._warn(
            f"{len(mismatches)} rows have inconsistent column count (expected: {expected})",
            mismatches=mismatches[:ROW_MISMATCH_PREVIEW],
        )

    # ------------------------------------------------------------------
    # ML readiness
    # ------------------------------------------------------------------

    def validate_for_ml(self, columns: Sequence[ColumnMeta], rows: Sequence[Sequence[str]]):
        errors = validate_dataset(columns, rows)

        if rows:
            sparse = [
                col.name for col in columns
                if col.missing_count / len(rows) > MAX_MISSING_RATIO
            ]
            if sparse:
                errors.append(
                    f"Columns with >{int(MAX_MISSING_RATIO * 100)}% missing values: {', '.join(sparse)}"
                )

        constant = [
            col.name for col in columns
            if isinstance(col, CategoricalColumnMeta) and col.is_constant
        ]
        if constant:
            self._warn(
                f"Columns with constant values detected: {constant}",
                columns=constant,
            )

        if errors:
            raise DatasetValidationError(errors)
