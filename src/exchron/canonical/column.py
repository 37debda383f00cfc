from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple


class ColumnType:
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    CATEGORICAL = "categorical"
    DATETIME = "datetime"
    TEXT = "text"

    # Inference priority, first match wins
    PRIORITY = (BOOLEAN, NUMERIC, DATETIME, CATEGORICAL, TEXT)


@dataclass(frozen=True)
class NumericStats:
    """
    Descriptive statistics over the successfully parsed values.
    `std` is the population standard deviation.
    """
    min: float
    max: float
    mean: float
    std: float


@dataclass(frozen=True)
class ColumnMeta:
    """
    Inferred metadata for one CSV column.

    Each inferred type has its own subclass carrying only
    the fields that make sense for it.
    """
    name: str
    index: int                  # position in RawDataset.header / rows
    missing_count: int

    inferred_type: ClassVar[str] = ColumnType.TEXT

    @property
    def is_target_candidate(self) -> bool:
        return self.inferred_type in (ColumnType.BOOLEAN, ColumnType.CATEGORICAL)

    @property
    def is_feature_candidate(self) -> bool:
        return self.inferred_type in (ColumnType.NUMERIC, ColumnType.CATEGORICAL)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "index": self.index,
            "inferred_type": self.inferred_type,
            "missing_count": self.missing_count,
        }


@dataclass(frozen=True)
class NumericColumnMeta(ColumnMeta):
    stats: Optional[NumericStats] = None

    inferred_type: ClassVar[str] = ColumnType.NUMERIC

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.stats is not None:
            data.update({
                "min": self.stats.min,
                "max": self.stats.max,
                "mean": self.stats.mean,
                "std": self.stats.std,
            })
        return data


@dataclass(frozen=True)
class CategoricalColumnMeta(ColumnMeta):
    unique_values: Tuple[str, ...] = ()

    inferred_type: ClassVar[str] = ColumnType.CATEGORICAL

    @property
    def is_constant(self) -> bool:
        return len(self.unique_values) <= 1

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["unique_values"] = list(self.unique_values)
        return data


@dataclass(frozen=True)
class BooleanColumnMeta(ColumnMeta):
    inferred_type: ClassVar[str] = ColumnType.BOOLEAN


@dataclass(frozen=True)
class DatetimeColumnMeta(ColumnMeta):
    inferred_type: ClassVar[str] = ColumnType.DATETIME


@dataclass(frozen=True)
class TextColumnMeta(ColumnMeta):
    inferred_type: ClassVar[str] = ColumnType.TEXT
