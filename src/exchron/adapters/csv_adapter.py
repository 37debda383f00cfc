import os
from typing import Optional

from exchron.adapters.csv_tokenizer import tokenize
from exchron.canonical.dataset import ParsedDataset, RawDataset
from exchron.inference.type_inference import infer_columns
from exchron.observability.logger import RequestTimer, log_event
from exchron.pipeline.dataset_validator import DatasetValidator
from exchron.utils.exceptions import DatasetParseError

DEFAULT_DATASET_NAME = "dataset.csv"


# ------------------------------------------------------------------
# CSV Adapter
# ------------------------------------------------------------------
class CSVAdapter:
    """
    CSV ingestion adapter.
    Responsibilities:
    - Reject blank input
    - Tokenize (quoted fields, escaped quotes)
    - Optionally keep only the first `max_rows` data rows
    - Validate header and row widths
    - Infer column types and statistics
    - Check ML readiness
    DOES NOT:
    - Pad, cut or coerce cells
    - Return anything on failure
    """
    def __init__(
        self,
        csv_text: str,
        filename: Optional[str] = None,
        max_rows: Optional[int] = None,
    ):
        self.csv_text = csv_text
        self.filename = filename or DEFAULT_DATASET_NAME
        self.max_rows = max_rows

    def parse(self) -> ParsedDataset:
        timer = RequestTimer()
        log_event("DATASET_PARSE_STARTED", {
            "dataset": self.filename,
            "characters": len(self.csv_text or ""),
            "max_rows": self.max_rows,
        })

        try:
            parsed = self._parse_csv()
        except DatasetParseError as e:
            log_event("DATASET_PARSE_FAILED", {
                "dataset": self.filename,
                "error": str(e),
                "duration_seconds": timer.duration(),
            })
            raise

        log_event("DATASET_PARSE_COMPLETED", {
            "dataset": self.filename,
            "rows": parsed.raw_dataset.row_count,
            "columns": parsed.raw_dataset.column_count,
            "types": {c.name: c.inferred_type for c in parsed.columns},
            "warnings": len(parsed.warnings),
            "duration_seconds": timer.duration(),
        })
        return parsed

    # --------------------------------------------------
    # Core CSV parsing logic
    # --------------------------------------------------
    def _parse_csv(self) -> ParsedDataset:
        if self.max_rows is not None and self.max_rows < 0:
            raise DatasetParseError(f"max_rows must not be negative (got {self.max_rows})")

        if not self.csv_text or not self.csv_text.strip():
            raise DatasetParseError("CSV content is empty or invalid")

        lines = tokenize(self.csv_text)

        if not lines:
            raise DatasetParseError("CSV file contains no valid rows")

        if len(lines) == 1:
            raise DatasetParseError("CSV file must contain header and at least one data row")

        header = lines[0]
        rows = lines[1:]

        if self.max_rows and len(rows) > self.max_rows:
            log_event("DATASET_TRUNCATED", {
                "dataset": self.filename,
                "original_rows": len(rows),
                "max_rows": self.max_rows,
            })
            rows = rows[:self.max_rows]

        validator = DatasetValidator(dataset_name=self.filename)
        validator.validate_header(header)
        validator.validate_row_consistency(header, rows)

        raw_dataset = RawDataset.build(
            name=self.filename,
            original_csv=self.csv_text,
            header=header,
            rows=rows,
        )

        columns = infer_columns(raw_dataset.header, raw_dataset.rows)

        validator.validate_for_ml(columns, raw_dataset.rows)

        return ParsedDataset(
            raw_dataset=raw_dataset,
            columns=tuple(columns),
            warnings=tuple(validator.warnings),
        )


def parse_csv(
    csv_text: str,
    filename: str = DEFAULT_DATASET_NAME,
    max_rows: Optional[int] = None,
) -> ParsedDataset:
    """
    Parse CSV text into a RawDataset plus inferred column metadata.

    Raises DatasetParseError (or a subclass) on any failure;
    no partial result is ever returned.
    """
    return CSVAdapter(csv_text, filename=filename, max_rows=max_rows).parse()


def parse_csv_file(file_path: str, max_rows: Optional[int] = None) -> ParsedDataset:
    """
    Read a CSV file from disk and parse it. The file's base
    name becomes the dataset name.
    """
    with open(file_path, encoding="utf-8-sig", errors="replace") as f:
        csv_text = f.read()
    return parse_csv(csv_text, filename=os.path.basename(file_path), max_rows=max_rows)
