import numpy as np
import pandas as pd
import pytest

from har_tidy.errors import ShapeMismatchError
from har_tidy.loader import load_dataset
from har_tidy.preprocessing import (
    merge_partitions,
    merge_dataset,
    select_feature_columns,
    clean_feature_name,
    filter_measurements,
    clean_activity_name,
    resolve_activity_labels,
    build_combined,
)
from conftest import (
    FEATURE_NAMES,
    SELECTED_POSITIONS,
    CLEAN_NAMES,
    TRAIN_SUBJECTS,
    TEST_SUBJECTS,
    TRAIN_X,
    TEST_X,
)


@pytest.fixture
def activities():
    return pd.DataFrame({'code': [1, 2, 3], 'name': ["WALKING", "WALKING_UPSTAIRS", "SITTING"]})


def test_merge_partitions_train_rows_first():
    train = pd.DataFrame([[1, 2], [3, 4]])
    test = pd.DataFrame([[5, 6]])

    merged = merge_partitions(train, test)

    assert merged.shape == (3, 2)
    assert merged.values.tolist() == [[1, 2], [3, 4], [5, 6]]
    assert list(merged.index) == [0, 1, 2]


def test_merge_partitions_column_mismatch():
    with pytest.raises(ShapeMismatchError):
        merge_partitions(pd.DataFrame([[1, 2]]), pd.DataFrame([[1, 2, 3]]))


def test_select_feature_columns_literal_match():
    pairs = list(enumerate(FEATURE_NAMES))

    selected = select_feature_columns(pairs, expected_count=None)

    assert [pos for pos, _ in selected] == SELECTED_POSITIONS


@pytest.mark.parametrize("name", [
    "fBodyAcc-meanFreq()-X",
    "angle(tBodyAccMean,gravity)",
    "angle(X,gravityMean)",
    "tBodyAcc-mean-X",
    "tBodyAccMean()",
])
def test_select_feature_columns_rejects_lookalikes(name):
    assert select_feature_columns([(0, name)], expected_count=None) == []


def test_select_feature_columns_warns_on_unexpected_count():
    with pytest.warns(UserWarning, match="expected 66"):
        select_feature_columns(list(enumerate(FEATURE_NAMES)))


def test_clean_feature_name():
    assert clean_feature_name("tBodyAcc-mean()-X") == "tbodyacc.mean.x"
    assert clean_feature_name("fBodyBodyGyroJerkMag-std()") == "fbodybodygyrojerkmag.std"
    assert [clean_feature_name(FEATURE_NAMES[i]) for i in SELECTED_POSITIONS] == CLEAN_NAMES


def test_filter_measurements():
    measurements = pd.DataFrame(TRAIN_X)
    selected = [(i, FEATURE_NAMES[i]) for i in SELECTED_POSITIONS]

    filtered = filter_measurements(measurements, selected)

    assert list(filtered.columns) == CLEAN_NAMES
    assert np.allclose(filtered.values, TRAIN_X[:, SELECTED_POSITIONS])


def test_filter_measurements_position_out_of_range():
    with pytest.raises(ShapeMismatchError):
        filter_measurements(pd.DataFrame(TRAIN_X), [(len(FEATURE_NAMES), "x-mean()")])


def test_clean_activity_name():
    assert clean_activity_name("WALKING_DOWNSTAIRS") == "walkingdownstairs"
    assert clean_activity_name("LAYING") == "laying"


def test_resolve_activity_labels(activities):
    labels = pd.Series([3, 1, 2, 1])

    names = resolve_activity_labels(labels, activities)

    assert names.tolist() == ["sitting", "walking", "walkingupstairs", "walking"]
    assert names.name == "activity"


@pytest.mark.parametrize("bad_code", [0, 4])
def test_resolve_activity_labels_out_of_range(activities, bad_code):
    with pytest.raises(IndexError):
        resolve_activity_labels(pd.Series([1, bad_code]), activities)


def test_build_combined_row_mismatch(activities):
    with pytest.raises(ShapeMismatchError):
        build_combined(pd.DataFrame([1, 2]), pd.DataFrame([1]), pd.DataFrame([[0.1], [0.2]]), activities)


def test_merge_dataset_keeps_rows_aligned(har_dir):
    dataset = load_dataset(str(har_dir))

    merged = merge_dataset(dataset)

    assert len(merged) == len(TRAIN_SUBJECTS) + len(TEST_SUBJECTS)
    assert merged.subjects[0].tolist() == TRAIN_SUBJECTS + TEST_SUBJECTS
    assert np.allclose(merged.measurements.values, np.vstack([TRAIN_X, TEST_X]))


def test_build_combined_shape_and_alignment(har_dir):
    dataset = load_dataset(str(har_dir))
    merged = merge_dataset(dataset)
    selected = select_feature_columns(dataset.metadata.feature_pairs(), expected_count=None)
    filtered = filter_measurements(merged.measurements, selected)

    combined = build_combined(merged.subjects, merged.labels, filtered, dataset.metadata.activities)

    assert combined.shape == (10, 2 + len(SELECTED_POSITIONS))
    assert list(combined.columns[:2]) == ["subject", "activity"]
    assert set(combined["activity"]) <= {"walking", "walkingupstairs", "sitting"}
    assert not combined["activity"].str.contains("_").any()

    # row 7 is the second test row: subject 2, code 3 (SITTING)
    row = combined.iloc[7]
    assert row["subject"] == 2
    assert row["activity"] == "sitting"
    assert row["tbodyacc.mean.x"] == pytest.approx(TEST_X[1, 0])
    assert row["tgravityaccmag.mean"] == pytest.approx(TEST_X[1, 6])

    # row 3 is the fourth train row: subject 3, code 3
    assert combined.iloc[3][["subject", "activity"]].tolist() == [3, "sitting"]
