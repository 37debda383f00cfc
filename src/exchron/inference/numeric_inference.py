import math
import statistics
from typing import Iterable, List, Optional

from exchron.canonical.column import NumericStats


def parse_number(value) -> Optional[float]:
    """
    Parse a cell as a finite float.

    Returns None for non-numeric text, NaN/Infinity spellings
    and digit-group underscores ("1_000").
    """
    v = str(value).strip()
    if not v or "_" in v:
        return None
    try:
        number = float(v)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_numbers(values: Iterable[str]) -> List[float]:
    numbers = []
    for v in values:
        number = parse_number(v)
        if number is not None:
            numbers.append(number)
    return numbers


def infer_numeric_stats(values: Iterable[str]) -> Optional[NumericStats]:
    """
    Compute min / max / mean / population std over the values
    that parse as numbers.

    Args:
        values (list): cell values as strings

    Returns:
        NumericStats | None when nothing parsed
    """
    numbers = parse_numbers(values)
    if not numbers:
        return None

    return NumericStats(
        min=min(numbers),
        max=max(numbers),
        mean=statistics.fmean(numbers),
        std=statistics.pstdev(numbers),
    )
