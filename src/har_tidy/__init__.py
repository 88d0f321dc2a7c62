"""Tidy the UCI HAR smartphone dataset: merge, filter, label and average."""

from har_tidy.errors import check_dependencies

__version__ = "0.1.0"


def run_analysis(data_dir=None, output_dir=None, config=None):
    """Check the processing libraries are installed, then run the pipeline. Returns True."""
    check_dependencies()
    from har_tidy.pipeline import run_analysis as _run_analysis
    return _run_analysis(data_dir=data_dir, output_dir=output_dir, config=config)
