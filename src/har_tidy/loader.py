import os
import warnings
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from har_tidy.constants import (
    SPLITS,
    FEATURES_FILE,
    ACTIVITY_LABELS_FILE,
    MEASUREMENTS_FILE,
    LABELS_FILE,
    SUBJECTS_FILE,
    EXPECTED_ROWS,
    NUM_FEATURES,
)
from har_tidy.errors import ShapeMismatchError


@dataclass
class Partition:
    """The three row-aligned tables of one split (or of the merged data)."""
    measurements: pd.DataFrame
    labels: pd.DataFrame
    subjects: pd.DataFrame

    def __len__(self):
        return len(self.measurements)


@dataclass
class Metadata:
    features: pd.DataFrame      # columns: index, name
    activities: pd.DataFrame    # columns: code, name

    def feature_pairs(self) -> List[tuple]:
        """Feature metadata as an explicit list of (0-based column, raw name) pairs."""
        return [(pos, name) for pos, name in enumerate(self.features['name'])]


@dataclass
class Dataset:
    partitions: Dict[str, Partition]
    metadata: Metadata


def read_table(path: str, **kwargs) -> pd.DataFrame:
    """Read one whitespace-delimited table without a header row."""
    return pd.read_csv(path, sep=r'\s+', header=None, **kwargs)


def required_files(data_dir: str) -> List[str]:
    paths = []
    for split in SPLITS:
        for template in (MEASUREMENTS_FILE, LABELS_FILE, SUBJECTS_FILE):
            paths.append(os.path.join(data_dir, template.format(split=split)))
    paths.append(os.path.join(data_dir, FEATURES_FILE))
    paths.append(os.path.join(data_dir, ACTIVITY_LABELS_FILE))
    return paths


def check_files_exist(data_dir: str) -> None:
    missing = [p for p in required_files(data_dir) if not os.path.isfile(p)]
    if missing:
        raise FileNotFoundError(f"Missing input file(s) under {data_dir!r}: {', '.join(missing)}")


def _single_column(df: pd.DataFrame, path: str) -> pd.DataFrame:
    if df.shape[1] != 1:
        raise ShapeMismatchError(f"{path} should have exactly 1 column, found {df.shape[1]}")
    return df


def load_partition(data_dir: str, split: str) -> Partition:
    """
    Load measurements, activity labels and subject ids for one split.

    Args:
        data_dir: root of the extracted dataset
        split: "train" or "test"
    Returns:
        Partition whose three tables have the same number of rows
    """
    x_path = os.path.join(data_dir, MEASUREMENTS_FILE.format(split=split))
    y_path = os.path.join(data_dir, LABELS_FILE.format(split=split))
    s_path = os.path.join(data_dir, SUBJECTS_FILE.format(split=split))

    measurements = read_table(x_path, dtype=float)
    labels = _single_column(read_table(y_path, dtype=int), y_path)
    subjects = _single_column(read_table(s_path, dtype=int), s_path)

    n_rows = {len(measurements), len(labels), len(subjects)}
    if len(n_rows) != 1:
        raise ShapeMismatchError(
            f"{split}: row counts differ (measurements={len(measurements)}, "
            f"labels={len(labels)}, subjects={len(subjects)})"
        )

    expected = EXPECTED_ROWS.get(split)
    if expected is not None and len(measurements) != expected:
        warnings.warn(f"{split} partition has {len(measurements)} rows, the UCI HAR release has {expected}")

    return Partition(measurements=measurements, labels=labels, subjects=subjects)


def load_metadata(data_dir: str) -> Metadata:
    features_path = os.path.join(data_dir, FEATURES_FILE)
    activities_path = os.path.join(data_dir, ACTIVITY_LABELS_FILE)

    features = read_table(features_path)
    if features.shape[1] != 2:
        raise ShapeMismatchError(f"{features_path} should have 2 columns, found {features.shape[1]}")
    features.columns = ['index', 'name']
    features['name'] = features['name'].astype(str)

    activities = read_table(activities_path)
    if activities.shape[1] != 2:
        raise ShapeMismatchError(f"{activities_path} should have 2 columns, found {activities.shape[1]}")
    activities.columns = ['code', 'name']

    codes = activities['code'].tolist()
    if codes != list(range(1, len(codes) + 1)):
        raise ShapeMismatchError(f"Activity codes in {activities_path} must run 1..{len(codes)}, got {codes}")

    if len(features) != NUM_FEATURES:
        warnings.warn(f"{features_path} lists {len(features)} features, the UCI HAR release has {NUM_FEATURES}")

    return Metadata(features=features, activities=activities)


def load_dataset(data_dir: str) -> Dataset:
    """Load both partitions and the metadata tables from `data_dir`."""
    check_files_exist(data_dir)
    metadata = load_metadata(data_dir)
    partitions = {split: load_partition(data_dir, split) for split in SPLITS}

    n_features = len(metadata.features)
    for split, part in partitions.items():
        if part.measurements.shape[1] != n_features:
            raise ShapeMismatchError(
                f"{split} measurements have {part.measurements.shape[1]} columns "
                f"but {FEATURES_FILE} lists {n_features} features"
            )

    return Dataset(partitions=partitions, metadata=metadata)
