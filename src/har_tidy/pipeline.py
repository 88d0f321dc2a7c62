from typing import Optional, Tuple

import pandas as pd

from har_tidy.aggregate import tidy_average
from har_tidy.config import Config
from har_tidy.loader import Dataset, load_dataset
from har_tidy.preprocessing import (
    merge_dataset,
    select_feature_columns,
    filter_measurements,
    build_combined,
)
from har_tidy.writer import write_combined, write_tidy, write_outputs


def _progress(config: Config, message: str) -> None:
    if config.verbose:
        print(f"\n{message}")


def build_tables(dataset: Dataset, config: Optional[Config] = None) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Run every transform on a loaded dataset without touching the filesystem.

    Returns:
        combined: subject, activity and the selected measurements, train rows first
        tidy: per (activity, subject) means of the selected measurements
    """
    config = config or Config()

    _progress(config, "Merging the training and test data...")
    merged = merge_dataset(dataset)

    _progress(config, "Extracting measurements for mean and standard deviation...")
    selected = select_feature_columns(
        dataset.metadata.feature_pairs(),
        pattern=config.selection.pattern,
        expected_count=config.selection.expected_count,
    )
    filtered = filter_measurements(merged.measurements, selected)

    _progress(config, "Assigning descriptive activity names...")
    _progress(config, "Labeling the data...")
    combined = build_combined(merged.subjects, merged.labels, filtered, dataset.metadata.activities)

    _progress(config, "Creating the tidy dataset with averages...")
    tidy = tidy_average(combined)
    return combined, tidy


def run_analysis(data_dir: Optional[str] = None, output_dir: Optional[str] = None,
                 config: Optional[Config] = None) -> bool:
    """
    Clean the UCI HAR tables under `data_dir` and write the combined and tidy
    datasets to `output_dir`.

    Both directories default to the ones in `config`, which default to the
    current directory. Nothing is written unless every step succeeds.

    Returns:
        True once both files are written
    """
    config = (config or Config()).with_paths(data_dir=data_dir, output_dir=output_dir)

    dataset = load_dataset(config.paths.data_dir)
    combined, tidy = build_tables(dataset, config)

    write_outputs([
        (combined, config.paths.combined_path, write_combined),
        (tidy, config.paths.tidy_path, write_tidy),
    ])

    _progress(config, "Data cleaning complete! A tidy dataset has been created.")
    return True
