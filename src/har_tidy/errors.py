from importlib.util import find_spec
from typing import List

from har_tidy.constants import REQUIRED_PACKAGES, PIP_NAMES


class HarTidyError(Exception):
    """Base class for errors raised by the cleaning pipeline."""


class MissingDependencyError(HarTidyError, ImportError):
    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        pip_names = ' '.join(PIP_NAMES.get(name, name) for name in self.missing)
        super().__init__(
            f"Please install the required package(s): {', '.join(self.missing)}! "
            f"(pip install {pip_names})"
        )


class ShapeMismatchError(HarTidyError, ValueError):
    """Row or column counts of two tables that must line up do not."""


def check_dependencies(packages: List[str] = REQUIRED_PACKAGES) -> None:
    """
    Verify every processing library is importable before any table is touched.

    Args:
        packages: import names to look up
    Raises:
        MissingDependencyError: listing all packages that could not be found
    """
    missing = [name for name in packages if find_spec(name) is None]
    if missing:
        raise MissingDependencyError(missing)
