"""
CSV text -> raw row mappings (header string -> cell string).
"""

from __future__ import annotations

import io
from typing import Dict, List, Sequence

import pandas as pd

RawRow = Dict[str, str]


class CsvLoadError(RuntimeError):
    """Base class for failures while loading a CSV source."""


class CsvFetchError(CsvLoadError):
    """Network failure or non-2xx response."""


class CsvParseError(CsvLoadError):
    """The payload could not be tokenized as CSV."""


def _frame_to_rows(df: pd.DataFrame) -> List[RawRow]:
    if df.empty:
        return []
    df = df.fillna("")
    # Rows made only of delimiters (",,,") are treated like blank lines
    non_empty = df.apply(lambda row: any(str(v).strip() for v in row), axis=1)
    df = df[non_empty]
    return [{str(k): str(v) for k, v in row.items()} for row in df.to_dict(orient="records")]


def parse_csv_text(text: str) -> List[RawRow]:
    """Parse CSV text using the first row as headers.

    Every cell is kept as a string: no NA coercion, no numeric inference.
    Blank lines are skipped, short rows are padded with empty strings and
    fields beyond the header width are dropped.
    """
    if not text or not text.strip():
        return []
    options = dict(
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=True,
        index_col=False,
    )
    try:
        width = len(pd.read_csv(io.StringIO(text), nrows=0, **options).columns)
        # Positional usecols lets the tokenizer accept rows longer than the header
        df = pd.read_csv(io.StringIO(text), usecols=list(range(width)), **options)
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise CsvParseError(f"Failed to parse CSV: {exc}") from exc
    return _frame_to_rows(df)


def rows_from_values(values: Sequence[Sequence[object]]) -> List[RawRow]:
    """Convert a header-first grid (e.g. a worksheet's values) into raw rows."""
    if not values:
        return []
    header = [str(h) for h in values[0]]
    body = []
    for row in values[1:]:
        cells = ["" if v is None else str(v) for v in row]
        cells = (cells + [""] * len(header))[: len(header)]
        body.append(cells)
    return _frame_to_rows(pd.DataFrame(body, columns=header, dtype=str))
