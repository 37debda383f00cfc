"""
Thresholds used by CSV ingestion, type inference and ML-readiness checks.

Kept in one place so tests can assert on them and tuning
does not require hunting for literals.
"""

import re

# ------------------------------------------------------------------
# Tokenizer
# ------------------------------------------------------------------
DELIMITER = ","
QUOTE = '"'

# ------------------------------------------------------------------
# Type inference
# ------------------------------------------------------------------
BOOLEAN_TOKENS = frozenset({"true", "false", "1", "0", "yes", "no"})

# Share of non-blank values that must parse for numeric / datetime
TYPE_MATCH_RATIO = 0.8

CATEGORICAL_MAX_DISTINCT = 30
CATEGORICAL_MAX_DISTINCT_RATIO = 0.5

# Upper bound on unique values kept for a categorical column
UNIQUE_VALUES_CAP = 50

# A date must look like one: 4-digit year, D/M or D-M
DATETIME_SHAPE_PATTERN = re.compile(r"\d{4}|\d{1,2}/\d{1,2}|\d{1,2}-\d{1,2}")

# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------
MIN_TRAINING_ROWS = 10

# Share of rows allowed to differ from the header width
ROW_MISMATCH_TOLERANCE = 0.1
ROW_MISMATCH_PREVIEW = 3

MAX_MISSING_RATIO = 0.5

# Column names outside this set only trigger a warning
SAFE_COLUMN_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_\s-]*$")
