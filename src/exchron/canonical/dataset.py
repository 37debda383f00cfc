from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from exchron.canonical.column import ColumnMeta


@dataclass(frozen=True)
class RawDataset:
    """
    Immutable snapshot of an ingested CSV file.

    Rows keep their original width; a short or long row is
    stored as-is (see DatasetValidator.validate_row_consistency).
    """
    name: str
    original_csv: str
    header: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @classmethod
    def build(
        cls,
        name: str,
        original_csv: str,
        header: Sequence[str],
        rows: Sequence[Sequence[str]],
    ) -> "RawDataset":
        return cls(
            name=name,
            original_csv=original_csv,
            header=tuple(header),
            rows=tuple(tuple(row) for row in rows),
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.header)

    def summary(self, preview_rows: int = 10) -> Dict[str, Any]:
        return {
            "name": self.name,
            "header": list(self.header),
            "row_count": self.row_count,
            "column_count": self.column_count,
            "rows_preview": [list(r) for r in self.rows[:preview_rows]],
        }


@dataclass(frozen=True)
class ParsedDataset:
    """
    Result of a successful parse: the raw data plus one
    metadata entry per header column, in header order.
    """
    raw_dataset: RawDataset
    columns: Tuple[ColumnMeta, ...]
    warnings: Tuple[str, ...] = ()

    def column(self, name: str) -> ColumnMeta:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(name)

    def to_dict(self, preview_rows: int = 10) -> Dict[str, Any]:
        return {
            "dataset": self.raw_dataset.summary(preview_rows=preview_rows),
            "columns": [c.to_dict() for c in self.columns],
            "warnings": list(self.warnings),
        }
