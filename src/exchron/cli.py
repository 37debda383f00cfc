import argparse
import json
import os
import sys

from exchron.adapters.csv_adapter import parse_csv_file
from exchron.canonical.column import CategoricalColumnMeta, NumericColumnMeta
from exchron.reports.dataset_report import DatasetReportGenerator
from exchron.utils.exceptions import DatasetParseError


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def cprint(text: str, color: str = C.RESET, bold: bool = False):
    if not sys.stdout.isatty():
        print(text)
        return
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}")


def _describe(col) -> str:
    if isinstance(col, NumericColumnMeta) and col.stats is not None:
        s = col.stats
        return f"min={s.min:g} max={s.max:g} mean={s.mean:.4g} std={s.std:.4g}"
    if isinstance(col, CategoricalColumnMeta):
        return ", ".join(col.unique_values[:5]) + (" ..." if len(col.unique_values) > 5 else "")
    return ""


def _print_table(parsed) -> None:
    raw = parsed.raw_dataset
    cprint(f"\n[DATASET] {raw.name}: {raw.row_count} rows x {raw.column_count} columns", C.CYAN, bold=True)
    width = max(len(c.name) for c in parsed.columns)
    for col in parsed.columns:
        print(
            f"  {col.index:>3}  {col.name:<{width}}  {col.inferred_type:<11}  "
            f"missing={col.missing_count:<5} {_describe(col)}"
        )
    for warning in parsed.warnings:
        cprint(f"[WARNING] {warning}", C.YELLOW)


def _profile(args: argparse.Namespace) -> int:
    if not os.path.isfile(args.file):
        cprint(f"[FAILED] File not found: {args.file}", C.RED, bold=True)
        return 1

    try:
        parsed = parse_csv_file(args.file, max_rows=args.max_rows)
    except DatasetParseError as e:
        cprint("\n[FAILED] Dataset could not be parsed.", C.RED, bold=True)
        cprint(str(e), C.RED)
        return 1

    if args.format == "json":
        print(json.dumps(parsed.to_dict(), indent=2))
    elif args.format == "markdown":
        print(DatasetReportGenerator(parsed).generate_markdown())
    else:
        _print_table(parsed)
        cprint("[COMPLETE] Dataset is ready for training", C.GREEN, bold=True)
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    if args.config:
        os.environ["EXCHRON_CONFIG"] = args.config
    uvicorn.run("exchron.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="exchron", description="Exchron dashboard tools")
    sub = parser.add_subparsers(dest="command", required=True)

    profile = sub.add_parser("profile", help="Parse a CSV and show inferred column types")
    profile.add_argument("file", help="Path to CSV file")
    profile.add_argument("--max-rows", type=int, default=None, help="Only read the first N data rows")
    profile.add_argument(
        "--format",
        default="table",
        choices=["table", "json", "markdown"],
        help="Output format",
    )
    profile.set_defaults(func=_profile)

    serve = sub.add_parser("serve", help="Run the dashboard web server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", 8000)))
    serve.add_argument("--config", help="Path to YAML config file")
    serve.set_defaults(func=_serve)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
