
# ===== Raw Data Layout =====
SPLITS = ["train", "test"]

FEATURES_FILE = "features.txt"
ACTIVITY_LABELS_FILE = "activity_labels.txt"
MEASUREMENTS_FILE = "{split}/X_{split}.txt"
LABELS_FILE = "{split}/y_{split}.txt"
SUBJECTS_FILE = "{split}/subject_{split}.txt"

UCI_HAR_URL = "https://archive.ics.uci.edu/static/public/240/human+activity+recognition+using+smartphones.zip"
UCI_HAR_DIRNAME = "UCI HAR Dataset"

# canonical sizes of the UCI HAR release
EXPECTED_ROWS = {"train": 7352, "test": 2947}
NUM_FEATURES = 561

# ===== Column Selection =====
MEAN_STD_PATTERN = r"-mean\(\)|-std\(\)"
EXPECTED_SELECTED = 66

# ===== Output =====
SUBJECT_COL = "subject"
ACTIVITY_COL = "activity"
GROUP_KEYS = (ACTIVITY_COL, SUBJECT_COL)

COMBINED_FILENAME = "combined_cleaned_data.txt"
TIDY_FILENAME = "tidy_average_data.txt"

REQUIRED_PACKAGES = ["pandas", "numpy", "yaml"]
DOWNLOAD_PACKAGES = ["requests", "tqdm"]

# pip names differ from import names for some packages
PIP_NAMES = {"yaml": "pyyaml"}
