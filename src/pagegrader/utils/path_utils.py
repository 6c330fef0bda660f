# src/pagegrader/utils/path_utils.py
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and submission paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed 'pagegrader' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Submission specific paths ---

    @staticmethod
    def get_work_dir(work_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Returns the directory holding the submission.
        Defaults to the current working directory, like a CI checkout.
        """
        return Path(work_dir).resolve() if work_dir else Path.cwd()

    @staticmethod
    def resolve_in_work_dir(name: Union[str, Path], work_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Resolves a (possibly relative) file name against the submission directory.
        Absolute paths are returned unchanged.
        """
        path = Path(name)
        if path.is_absolute():
            return path
        return PathUtils.get_work_dir(work_dir) / path
