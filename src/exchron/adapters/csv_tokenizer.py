from typing import List

from exchron.standards.ingestion_limits import DELIMITER, QUOTE
from exchron.utils.exceptions import MalformedCSVError


def tokenize_line(line: str, line_number: int = 1) -> List[str]:
    """
    Split one CSV line into trimmed fields.

    - A quote toggles quoted mode
    - Inside quotes, a doubled quote is a literal quote
    - Delimiters only split outside quotes
    - The last field is always flushed

    Raises MalformedCSVError when the line ends inside quotes.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]

        if char == QUOTE:
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                # escaped quote
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    if in_quotes:
        raise MalformedCSVError(f"Malformed CSV: unbalanced quotes at line {line_number}")

    fields.append("".join(current).strip())
    return fields


def tokenize(csv_text: str) -> List[List[str]]:
    """
    Split raw CSV text into rows of string fields.

    Blank (whitespace-only) lines are skipped. Quoted fields
    cannot span lines.
    """
    rows: List[List[str]] = []

    for line_number, line in enumerate(csv_text.split("\n"), start=1):
        if line.strip() == "":
            continue
        rows.append(tokenize_line(line, line_number=line_number))

    return rows
