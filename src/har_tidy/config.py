from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import os
import re

import yaml

from har_tidy.constants import (
    COMBINED_FILENAME,
    TIDY_FILENAME,
    MEAN_STD_PATTERN,
    EXPECTED_SELECTED,
    UCI_HAR_URL,
)


@dataclass
class PathsConfig:
    """Where the raw tables are read from and the two outputs are written to."""
    data_dir: str = "."
    output_dir: str = "."
    combined_filename: str = COMBINED_FILENAME
    tidy_filename: str = TIDY_FILENAME

    def __post_init__(self):
        if not self.combined_filename or not self.tidy_filename:
            raise ValueError("combined_filename and tidy_filename must be non-empty")
        if self.combined_filename == self.tidy_filename:
            raise ValueError("combined_filename and tidy_filename must differ")

    @property
    def combined_path(self) -> str:
        return os.path.join(self.output_dir, self.combined_filename)

    @property
    def tidy_path(self) -> str:
        return os.path.join(self.output_dir, self.tidy_filename)


@dataclass
class SelectionConfig:
    pattern: str = MEAN_STD_PATTERN
    expected_count: Optional[int] = EXPECTED_SELECTED

    def __post_init__(self):
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"selection pattern {self.pattern!r} does not compile: {e}") from e
        if self.expected_count is not None and self.expected_count < 0:
            raise ValueError("expected_count must be >= 0 or null")


@dataclass
class DownloadConfig:
    url: str = UCI_HAR_URL
    archive_name: str = "uci_har.zip"
    extract_dir: str = "raw_data"


@dataclass
class Config:
    paths: PathsConfig = field(default_factory=PathsConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    verbose: bool = True

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> 'Config':
        """
        Build a Config from a (possibly partial) nested dictionary.

        Missing sections fall back to their defaults; unknown keys are an error
        so that typos in config.yml do not go unnoticed.
        """
        config_dict = dict(config_dict or {})
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise ValueError(f"Unknown config section(s): {sorted(unknown)}. Valid sections: {sorted(known)}")

        verbose = config_dict.get('verbose')
        return cls(
            paths=PathsConfig(**(config_dict.get('paths') or {})),
            selection=SelectionConfig(**(config_dict.get('selection') or {})),
            download=DownloadConfig(**(config_dict.get('download') or {})),
            verbose=True if verbose is None else bool(verbose),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'Config':
        """Load configuration from a YAML file"""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)
        if config_dict is not None and not isinstance(config_dict, dict):
            raise ValueError(f"Top level of {yaml_path} must be a mapping")
        return cls.from_dict(config_dict)

    def with_paths(self, data_dir: Optional[str] = None, output_dir: Optional[str] = None) -> 'Config':
        """Return a copy with the data/output directories overridden where given."""
        paths = PathsConfig(
            data_dir=data_dir if data_dir is not None else self.paths.data_dir,
            output_dir=output_dir if output_dir is not None else self.paths.output_dir,
            combined_filename=self.paths.combined_filename,
            tidy_filename=self.paths.tidy_filename,
        )
        return Config(paths=paths, selection=self.selection, download=self.download, verbose=self.verbose)
