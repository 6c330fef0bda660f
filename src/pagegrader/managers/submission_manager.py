# src/pagegrader/managers/submission_manager.py
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pagegrader.errors import SubmissionNotFoundError
from pagegrader.managers.config_manager import config_manager
from pagegrader.model import Submission
from pagegrader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class SubmissionManager:
    """
    Loads a submission from a working directory: the required HTML file and
    the first stylesheet found next to it.
    """

    def __init__(
            self,
            work_dir: Optional[Union[str, Path]] = None,
            html_file: Optional[str] = None,
            css_extension: Optional[str] = None
    ):
        self.work_dir = PathUtils.get_work_dir(work_dir)
        self.html_file = html_file or config_manager.get_nested("grader.html_file", "index.html")
        self.css_extension = css_extension or config_manager.get_nested("grader.css_extension", ".css")

    @property
    def html_path(self) -> Path:
        return PathUtils.resolve_in_work_dir(self.html_file, self.work_dir)

    def find_stylesheets(self) -> List[str]:
        """Stylesheet names in directory listing order (no sorting)."""
        return [
            name for name in os.listdir(self.work_dir)
            if name.endswith(self.css_extension) and (self.work_dir / name).is_file()
        ]

    def load(self) -> Submission:
        """
        Reads the submission from disk.

        Raises:
            SubmissionNotFoundError: When the HTML file is missing.
        """
        if not self.html_path.is_file():
            raise SubmissionNotFoundError(self.html_file)

        html = self._read_text(self.html_path)

        css_files = self.find_stylesheets()
        css = ""
        if css_files:
            css = self._read_text(self.work_dir / css_files[0])
            if len(css_files) > 1:
                logger.info("Found %d stylesheets, grading %s", len(css_files), css_files[0])
        else:
            logger.info("No stylesheet found in %s", self.work_dir)

        return Submission(work_dir=self.work_dir, html=html, css=css, css_files=tuple(css_files))

    @staticmethod
    def _read_text(path: Path) -> str:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
