from typing import Sequence

import pandas as pd

from har_tidy.constants import GROUP_KEYS


def measurement_columns(df: pd.DataFrame, keys: Sequence[str] = GROUP_KEYS):
    return [col for col in df.columns if col not in keys]


def tidy_average(combined: pd.DataFrame, keys: Sequence[str] = GROUP_KEYS) -> pd.DataFrame:
    """
    Average every measurement per (activity, subject).

    One output row per key pair that occurs in `combined`; pairs that never
    occur are absent. Rows are sorted by activity name, then subject id, and
    the columns are the keys followed by the measurements in their original
    order.

    Args:
        combined: labeled table holding the key columns and numeric measurements
        keys: grouping columns, outermost first
    Returns:
        tidy DataFrame with a fresh 0-based index
    """
    keys = list(keys)
    missing = [k for k in keys if k not in combined.columns]
    if missing:
        raise KeyError(f"Grouping column(s) {missing} not in table")

    values = measurement_columns(combined, keys)
    tidy = (
        combined.groupby(keys, sort=True)[values]
        .mean()
        .reset_index()
    )
    return tidy[keys + values]
