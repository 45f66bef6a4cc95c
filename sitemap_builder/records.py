"""
sitemap_builder.records — Entry records and batch-input normalisation.

``add_urls`` accepts loosely shaped items (plain strings, mappings keyed by
field name, positional tuples).  They are turned into ``UrlEntry`` values
here, at the boundary, so the chunking code only ever sees one shape.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import pandas as pd

from sitemap_builder.errors import ValidationError

# Field names, in positional order
FIELDS = ("url", "lastmod", "changefreq", "priority")


@dataclass(frozen=True)
class UrlEntry:
    location: str
    last_modified: str = ""
    change_frequency: str = ""
    priority: str = ""


@dataclass(frozen=True)
class IndexEntry:
    location: str
    last_modified: str = ""


def as_text(value: Any) -> str:
    """Coerce a field value to the string written into the XML."""
    if value is None:
        return ""
    # NaN, NaT and pd.NA write nothing, as in the DataFrame path
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _from_mapping(item: Mapping) -> list[str]:
    values = []
    for position, name in enumerate(FIELDS):
        value = item.get(name)
        if value is None:
            value = item.get(position)
        values.append(as_text(value))
    return values


def _from_sequence(item: Sequence) -> list[str]:
    if not 1 <= len(item) <= len(FIELDS):
        raise ValidationError(
            f"Positional URL entries take 1 to {len(FIELDS)} values, got {len(item)}"
        )
    values = [as_text(value) for value in item]
    return values + [""] * (len(FIELDS) - len(values))


def entry_from_item(item: Any) -> UrlEntry:
    """
    Build a ``UrlEntry`` from one ``add_urls`` item.

    Accepted shapes:
      - a plain string (the URL only)
      - a mapping keyed ``url``/``lastmod``/``changefreq``/``priority``;
        integer keys 0-3 are used when a named key is missing
      - a list or tuple of 1-4 positional values in the same order

    Missing fields default to an empty string.  The location itself is not
    validated here; ``ChunkManager.append_url`` does that after relative
    URLs have been expanded.
    """
    if isinstance(item, str):
        values = [item, "", "", ""]
    elif isinstance(item, Mapping):
        values = _from_mapping(item)
    elif isinstance(item, (list, tuple)):
        values = _from_sequence(item)
    else:
        raise ValidationError(
            f"Unsupported URL entry of type {type(item).__name__}"
        )
    return UrlEntry(*values)


def _column_values(series: pd.Series) -> list[str]:
    """Render one DataFrame column as strings; NaN / NaT become ""."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return ["" if pd.isna(value) else value.isoformat() for value in series.tolist()]
    return ["" if pd.isna(value) else as_text(value) for value in series.tolist()]


def entries_from_dataframe(df: pd.DataFrame) -> list[UrlEntry]:
    """
    Convert a DataFrame with a ``url`` column (and optional ``lastmod``,
    ``changefreq``, ``priority`` columns) into ``UrlEntry`` values, one per
    row, in row order.
    """
    if "url" not in df.columns:
        raise ValidationError("DataFrame must contain a 'url' column")

    columns = []
    for name in FIELDS:
        if name in df.columns:
            columns.append(_column_values(df[name]))
        else:
            columns.append([""] * len(df))

    return [UrlEntry(*row) for row in zip(*columns)]
