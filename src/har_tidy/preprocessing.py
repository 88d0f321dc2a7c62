import re
import warnings
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from har_tidy.constants import MEAN_STD_PATTERN, EXPECTED_SELECTED, SUBJECT_COL, ACTIVITY_COL, SPLITS
from har_tidy.errors import ShapeMismatchError
from har_tidy.loader import Dataset, Partition


def merge_partitions(train: pd.DataFrame, test: pd.DataFrame) -> pd.DataFrame:
    """Stack the test rows under the train rows, keeping their order."""
    if train.shape[1] != test.shape[1]:
        raise ShapeMismatchError(f"Cannot merge tables with {train.shape[1]} and {test.shape[1]} columns")
    merged = pd.concat([train, test], axis=0, ignore_index=True)
    assert len(merged) == len(train) + len(test)
    return merged


def merge_dataset(dataset: Dataset) -> Partition:
    train, test = (dataset.partitions[split] for split in SPLITS)
    return Partition(
        measurements=merge_partitions(train.measurements, test.measurements),
        labels=merge_partitions(train.labels, test.labels),
        subjects=merge_partitions(train.subjects, test.subjects),
    )


def select_feature_columns(features: Iterable[Tuple[int, str]],
                           pattern: str = MEAN_STD_PATTERN,
                           expected_count: Optional[int] = EXPECTED_SELECTED) -> List[Tuple[int, str]]:
    """
    Keep the features whose raw name contains a literal `-mean()` or `-std()`.

    Names such as `fBodyAcc-meanFreq()-X` or `angle(tBodyAccMean,gravity)` do
    not match and are left out.

    Args:
        features: (column position, raw name) pairs
        pattern: regular expression searched for in each name
        expected_count: warn when the number of matches differs; None disables
    Returns:
        matching pairs, in input order
    """
    regex = re.compile(pattern)
    selected = [(pos, name) for pos, name in features if regex.search(name)]

    if expected_count is not None and len(selected) != expected_count:
        warnings.warn(f"Selected {len(selected)} mean/std features, expected {expected_count}")
    return selected


def clean_feature_name(name: str) -> str:
    # tBodyAcc-mean()-X -> tbodyacc.mean.x
    name = re.sub(r"[()]", "", name)
    name = name.replace("-", ".")
    return name.lower()


def filter_measurements(measurements: pd.DataFrame, selected: List[Tuple[int, str]]) -> pd.DataFrame:
    """Reduce the measurement table to the selected columns and give them clean names."""
    positions = [pos for pos, _ in selected]
    out_of_range = [pos for pos in positions if not 0 <= pos < measurements.shape[1]]
    if out_of_range:
        raise ShapeMismatchError(
            f"Feature positions {out_of_range} are outside the {measurements.shape[1]} measurement columns"
        )

    filtered = measurements.iloc[:, positions].copy()
    filtered.columns = [clean_feature_name(name) for _, name in selected]
    return filtered


def clean_activity_name(name: str) -> str:
    return str(name).replace("_", "").lower()


def resolve_activity_labels(labels: pd.Series, activities: pd.DataFrame) -> pd.Series:
    """
    Replace 1-based activity codes with their descriptive names.

    The lookup is positional: code k is the k-th row of the activity table.

    Raises:
        IndexError: if a code is below 1 or past the last activity row
    """
    names = np.array([clean_activity_name(n) for n in activities['name']], dtype=object)
    codes = np.asarray(labels, dtype=int)

    bad = codes[(codes < 1) | (codes > len(names))]
    if bad.size:
        raise IndexError(f"Activity code(s) {sorted(set(bad.tolist()))} outside 1..{len(names)}")

    return pd.Series(names[codes - 1], index=labels.index, name=ACTIVITY_COL)


def build_combined(subjects: pd.DataFrame, labels: pd.DataFrame,
                   measurements: pd.DataFrame, activities: pd.DataFrame) -> pd.DataFrame:
    """Put subject id and activity name in front of the filtered measurements."""
    if not len(subjects) == len(labels) == len(measurements):
        raise ShapeMismatchError(
            f"Row counts differ (subjects={len(subjects)}, labels={len(labels)}, "
            f"measurements={len(measurements)})"
        )

    subject = subjects.iloc[:, 0].astype(int).rename(SUBJECT_COL)
    activity = resolve_activity_labels(labels.iloc[:, 0], activities)
    return pd.concat([subject, activity, measurements], axis=1)
