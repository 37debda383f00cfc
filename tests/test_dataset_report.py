from conftest import KOI_HEADER, koi_rows, make_csv
from exchron.adapters.csv_adapter import parse_csv
from exchron.reports.dataset_report import DatasetReportGenerator


def test_report_sections_in_order(koi_csv):
    markdown = DatasetReportGenerator(parse_csv(koi_csv, filename="koi.csv")).generate_markdown()

    headings = [line for line in markdown.splitlines() if line.startswith("#")]
    assert headings == [
        "# koi.csv",
        "## Overview",
        "## Column Types",
        "## Columns",
        "## ML Readiness",
    ]
    assert "- **Rows**: 10" in markdown
    assert "- **numeric**: 3" in markdown
    assert "Dataset passes all readiness checks." in markdown


def test_report_lists_categories_and_stats(koi_csv):
    markdown = DatasetReportGenerator(parse_csv(koi_csv)).generate_markdown()

    assert "| 3 | koi_disposition | categorical | 0 | CONFIRMED, CANDIDATE, FALSE POSITIVE |" in markdown
    assert "min=100, max=190" in markdown


def test_report_includes_warnings():
    header = KOI_HEADER + ["depth (ppm)"]
    rows = [row + [str(i)] for i, row in enumerate(koi_rows(10))]
    markdown = DatasetReportGenerator(parse_csv(make_csv(header, rows))).generate_markdown()

    assert "## Warnings" in markdown
    assert "special characters" in markdown


def test_report_escapes_pipes_in_values():
    header = KOI_HEADER + ["band"]
    rows = [row + ["g|r" if i % 2 else "i"] for i, row in enumerate(koi_rows(10))]
    markdown = DatasetReportGenerator(parse_csv(make_csv(header, rows))).generate_markdown()

    assert "g\\|r" in markdown
