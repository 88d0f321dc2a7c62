import os
import zipfile

import requests
from tqdm import tqdm

from har_tidy.config import Config
from har_tidy.constants import UCI_HAR_DIRNAME


def download_file(url: str, filename: str) -> str:
    if os.path.exists(filename):
        print(f"File {filename} already exists. Skipping download.")
        return filename

    response = requests.get(url, stream=True, timeout=60)
    response.raise_for_status()
    total_size = int(response.headers.get('content-length', 0))

    tmp_name = filename + ".part"
    with open(tmp_name, "wb") as f, tqdm(
        desc=os.path.basename(filename),
        total=total_size,
        unit='iB',
        unit_scale=True,
        unit_divisor=1024,
    ) as pbar:
        for data in response.iter_content(chunk_size=1024):
            size = f.write(data)
            pbar.update(size)
    os.replace(tmp_name, filename)

    print(f"Downloaded {filename}")
    return filename


def _extract_nested(archive: str, target_dir: str) -> None:
    with zipfile.ZipFile(archive, 'r') as zip_ref:
        names = zip_ref.namelist()
        zip_ref.extractall(target_dir)

    # The UCI download wraps the dataset zip inside another zip
    for name in names:
        if name.endswith('.zip') and UCI_HAR_DIRNAME in name:
            inner = os.path.join(target_dir, name)
            with zipfile.ZipFile(inner, 'r') as zip_ref:
                zip_ref.extractall(target_dir)
            os.remove(inner)


def download_extract_uci_har(config: Config) -> str:
    """
    Fetch and unpack the UCI HAR dataset.

    Returns:
        path of the extracted `UCI HAR Dataset` directory
    """
    extract_dir = config.download.extract_dir
    dataset_dir = os.path.join(extract_dir, UCI_HAR_DIRNAME)
    if os.path.isdir(dataset_dir):
        print(f"Data {UCI_HAR_DIRNAME} already exists. Skipping download.")
        return dataset_dir

    os.makedirs(extract_dir, exist_ok=True)
    archive = os.path.join(extract_dir, config.download.archive_name)
    download_file(config.download.url, archive)
    _extract_nested(archive, extract_dir)
    os.remove(archive)

    if not os.path.isdir(dataset_dir):
        raise FileNotFoundError(f"{archive} did not contain a '{UCI_HAR_DIRNAME}' directory")
    return dataset_dir
