from pathlib import Path

import numpy as np
import pytest

from har_tidy.config import Config

FEATURE_NAMES = [
    "tBodyAcc-mean()-X",
    "tBodyAcc-mean()-Y",
    "tBodyAcc-std()-X",
    "tBodyAcc-mad()-X",
    "fBodyAcc-meanFreq()-X",
    "angle(tBodyAccMean,gravity)",
    "tGravityAccMag-mean()",
    "fBodyBodyGyroJerkMag-std()",
    "tBodyGyro-energy()-Z",
    "angle(X,gravityMean)",
]
SELECTED_POSITIONS = [0, 1, 2, 6, 7]
CLEAN_NAMES = [
    "tbodyacc.mean.x",
    "tbodyacc.mean.y",
    "tbodyacc.std.x",
    "tgravityaccmag.mean",
    "fbodybodygyrojerkmag.std",
]

ACTIVITIES = ["WALKING", "WALKING_UPSTAIRS", "SITTING"]

TRAIN_SUBJECTS = [1, 1, 3, 3, 1, 3]
TRAIN_LABELS = [1, 2, 1, 3, 1, 2]
TEST_SUBJECTS = [2, 2, 4, 4]
TEST_LABELS = [3, 3, 1, 2]


def measurement_matrix(n_rows, offset):
    # every cell is distinct so misaligned rows or columns show up in tests
    rows = np.arange(n_rows)[:, None] * 10.0
    cols = np.arange(len(FEATURE_NAMES))[None, :]
    return offset + rows + cols + 0.5


TRAIN_X = measurement_matrix(len(TRAIN_SUBJECTS), 0.0)
TEST_X = measurement_matrix(len(TEST_SUBJECTS), 100.0)


def _write_ints(path: Path, values):
    path.write_text("".join(f"{v}\n" for v in values))


def write_har_tree(root: Path) -> Path:
    """Lay out a miniature copy of the UCI HAR directory under `root`."""
    (root / "train").mkdir(parents=True, exist_ok=True)
    (root / "test").mkdir(parents=True, exist_ok=True)

    (root / "features.txt").write_text(
        "".join(f"{i} {name}\n" for i, name in enumerate(FEATURE_NAMES, start=1)))
    (root / "activity_labels.txt").write_text(
        "".join(f"{i} {name}\n" for i, name in enumerate(ACTIVITIES, start=1)))

    np.savetxt(root / "train" / "X_train.txt", TRAIN_X, fmt="%15.8e")
    np.savetxt(root / "test" / "X_test.txt", TEST_X, fmt="%15.8e")
    _write_ints(root / "train" / "y_train.txt", TRAIN_LABELS)
    _write_ints(root / "test" / "y_test.txt", TEST_LABELS)
    _write_ints(root / "train" / "subject_train.txt", TRAIN_SUBJECTS)
    _write_ints(root / "test" / "subject_test.txt", TEST_SUBJECTS)
    return root


@pytest.fixture
def har_dir(tmp_path):
    return write_har_tree(tmp_path / "UCI HAR Dataset")


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def test_config():
    return Config.from_dict({"selection": {"expected_count": None}, "verbose": False})

