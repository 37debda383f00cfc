from collections import Counter
from datetime import datetime, timezone
from typing import List

from exchron.canonical.column import CategoricalColumnMeta, ColumnType, NumericColumnMeta
from exchron.canonical.dataset import ParsedDataset
from exchron.pipeline.dataset_validator import validate_dataset

# Unique values shown per categorical column in the table
MAX_VALUES_IN_TABLE = 5


class DatasetReportGenerator:
    """
    Markdown profile of a parsed dataset.

    Includes:
    - Dataset overview
    - Column type breakdown
    - Per-column table (missing values, stats, categories)
    - ML-readiness findings
    - Parse warnings
    """

    def __init__(self, parsed: ParsedDataset):
        self.parsed = parsed

    # ======================================================
    # PUBLIC ENTRYPOINT
    # ======================================================

    def generate_markdown(self) -> str:
        lines: List[str] = []

        raw = self.parsed.raw_dataset
        lines.append(f"# {raw.name}")
        lines.append("")
        lines.append("## Overview")
        lines.append(f"- **Rows**: {raw.row_count}")
        lines.append(f"- **Columns**: {raw.column_count}")
        lines.append("")

        self._render_type_breakdown(lines)
        self._render_columns(lines)
        self._render_readiness(lines)
        self._render_warnings(lines)
        self._render_footer(lines)

        return "\n".join(lines)

    # ======================================================
    # SECTIONS
    # ======================================================

    def _render_type_breakdown(self, lines: List[str]):
        counts = Counter(c.inferred_type for c in self.parsed.columns)
        lines.append("## Column Types")
        lines.append("")
        for column_type in ColumnType.PRIORITY:
            if counts.get(column_type):
                lines.append(f"- **{column_type}**: {counts[column_type]}")
        lines.append("")

    def _render_columns(self, lines: List[str]):
        lines.append("## Columns")
        lines.append("")
        lines.append("| # | Column | Type | Missing | Details |")
        lines.append("|---|---|---|---|---|")

        for col in self.parsed.columns:
            lines.append(
                f"| {col.index} | {self._escape(col.name)} | {col.inferred_type} "
                f"| {col.missing_count} | {self._details(col)} |"
            )
        lines.append("")

    def _details(self, col) -> str:
        if isinstance(col, NumericColumnMeta) and col.stats is not None:
            s = col.stats
            return f"min={s.min:g}, max={s.max:g}, mean={s.mean:.4g}, std={s.std:.4g}"
        if isinstance(col, CategoricalColumnMeta):
            shown = [self._escape(v) for v in col.unique_values[:MAX_VALUES_IN_TABLE]]
            more = len(col.unique_values) - len(shown)
            suffix = f" (+{more} more)" if more > 0 else ""
            return ", ".join(shown) + suffix
        return ""

    def _render_readiness(self, lines: List[str]):
        errors = validate_dataset(self.parsed.columns, self.parsed.raw_dataset.rows)
        lines.append("## ML Readiness")
        lines.append("")
        if not errors:
            lines.append("Dataset passes all readiness checks.")
        for error in errors:
            lines.append(f"- {error}")
        lines.append("")

    def _render_warnings(self, lines: List[str]):
        if not self.parsed.warnings:
            return
        lines.append("## Warnings")
        lines.append("")
        for warning in self.parsed.warnings:
            lines.append(f"- {warning}")
        lines.append("")

    def _render_footer(self, lines: List[str]):
        lines.append("---")
        lines.append(f"_Generated {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}_")

    @staticmethod
    def _escape(text: str) -> str:
        return str(text).replace("|", "\\|")
