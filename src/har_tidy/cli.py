import argparse
import os
import sys

from har_tidy.constants import DOWNLOAD_PACKAGES
from har_tidy.errors import HarTidyError, check_dependencies


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='har-tidy',
        description='Merge, label and average the UCI HAR mean/std measurements')
    parser.add_argument('--config', default=None,
                        help='YAML config file (default: config.yml if present)')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--data-dir', default=None,
                        help='Directory holding train/, test/, features.txt and activity_labels.txt')
    source.add_argument('--download', action='store_true',
                        help='Fetch the UCI HAR archive and read from the extracted copy')
    parser.add_argument('--output-dir', default=None,
                        help='Directory the two output tables are written to')
    parser.add_argument('--quiet', action='store_true',
                        help='Do not print progress messages')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        check_dependencies()

        # imported here so a missing pandas is reported by check_dependencies
        from har_tidy.config import Config
        from har_tidy.pipeline import run_analysis

        config_path = args.config
        if config_path is None and os.path.exists('config.yml'):
            config_path = 'config.yml'
        config = Config.from_yaml(config_path) if config_path else Config()
        if args.quiet:
            config.verbose = False

        data_dir = args.data_dir
        if args.download:
            check_dependencies(DOWNLOAD_PACKAGES)
            from har_tidy.download import download_extract_uci_har
            data_dir = download_extract_uci_har(config)

        run_analysis(data_dir=data_dir, output_dir=args.output_dir, config=config)
    except (HarTidyError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
