import csv
import os
import tempfile
from pathlib import Path
from typing import Callable, List, Tuple

import pandas as pd

# write.table prints reals with 15 significant digits
FLOAT_FORMAT = "%.15g"


def _quote(value) -> str:
    return f'"{value}"'


def _quote_labels(df: pd.DataFrame) -> pd.DataFrame:
    """Double-quote the header and every text cell the way R's write.table does."""
    out = df.copy()
    for col in out.columns:
        if not pd.api.types.is_numeric_dtype(out[col]):
            out[col] = out[col].map(_quote)
    out.columns = [_quote(col) for col in out.columns]
    return out


def write_combined(df: pd.DataFrame, path) -> None:
    """
    Space-delimited table with quoted row names "1".."n" as an unlabeled first column.

    The header holds one field fewer than the data rows, which is how R's
    write.table lays it out; `pd.read_csv(path, sep=" ")` reads the row names
    back as the index.
    """
    out = _quote_labels(df)
    out.index = [_quote(i) for i in range(1, len(out) + 1)]
    out.to_csv(path, sep=" ", index=True, index_label=False, lineterminator="\n",
               quoting=csv.QUOTE_NONE, float_format=FLOAT_FORMAT)


def write_tidy(df: pd.DataFrame, path) -> None:
    """Tab-delimited table with a quoted header row and no row names."""
    _quote_labels(df).to_csv(path, sep="\t", index=False, lineterminator="\n",
                             quoting=csv.QUOTE_NONE, float_format=FLOAT_FORMAT)


def _stage(df: pd.DataFrame, path: Path, write: Callable) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=str(path.parent), prefix=path.name + ".tmp.") as tf:
        tmp = Path(tf.name)
    try:
        write(df, tmp)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return tmp


def write_outputs(outputs: List[Tuple[pd.DataFrame, str, Callable]]) -> List[str]:
    """
    Write every (table, path, writer) triple, or none of them.

    Each table goes to a temporary file next to its target first; the targets
    are only replaced once all temporary files were written.
    """
    staged = []
    try:
        for df, path, write in outputs:
            staged.append((_stage(df, Path(path), write), Path(path)))
    except BaseException:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    for tmp, path in staged:
        os.replace(tmp, path)
    return [str(path) for _, path in staged]
