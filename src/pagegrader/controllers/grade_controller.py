import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from pagegrader.controllers.report_controller import ReportController
from pagegrader.dom.builder import DocumentBuilder
from pagegrader.errors import SubmissionNotFoundError
from pagegrader.managers.config_manager import config_manager
from pagegrader.managers.submission_manager import SubmissionManager
from pagegrader.model import Report
from pagegrader.rubric.core import GradingContext
from pagegrader.rubric.engine import RubricEngine
from pagegrader.rubric.registry import RubricRegistry
from pagegrader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_FAIL = 1


class GradeController:
    """
    Orchestrates one grading run: load, parse, score, report, and map the
    score to a process exit code.
    """

    def __init__(
            self,
            work_dir: Optional[Union[str, Path]] = None,
            profile: Optional[str] = None,
            report_file: Optional[str] = None,
            write_report: bool = True,
            console_style: Optional[str] = None,
            stream: Optional[TextIO] = None
    ):
        self.work_dir = PathUtils.get_work_dir(work_dir)
        self.profile_name = profile or config_manager.get_nested("grader.profile", "media")
        self.report_file = report_file or config_manager.get_nested("report.file", "grading-feedback.md")
        self.write_report = write_report
        self.console_style = console_style
        self.stream = stream

        self.submission_manager = SubmissionManager(self.work_dir)
        self.builder = DocumentBuilder()
        self.report_controller = ReportController()

    def grade(self) -> Report:
        """
        Loads and scores the submission without publishing anything.

        Raises:
            SubmissionNotFoundError: When the HTML file is missing.
            UnknownProfileError: When the configured profile does not exist.
        """
        profile = RubricRegistry.get_profile(self.profile_name)
        submission = self.submission_manager.load()
        doc = self.builder.parse_doc(submission.html)

        ctx = GradingContext(
            doc=doc,
            html=submission.html,
            css=submission.css,
            css_files=submission.css_files,
        )
        return RubricEngine(profile).run(ctx)

    def run(self) -> int:
        """Grades, publishes the report and returns the exit code."""
        try:
            report = self.grade()
            profile = RubricRegistry.get_profile(report.profile)

            report_path = None
            if self.write_report:
                report_path = PathUtils.resolve_in_work_dir(self.report_file, self.work_dir)

            self.report_controller.publish(
                report,
                report_path=report_path,
                console_style=self.console_style or profile.console_style,
                stream=self.stream,
            )
        except SubmissionNotFoundError as e:
            logger.error("Submission missing: %s", e.path)
            print(f"❌ FATAL: {e.path} not found!", file=sys.stderr)
            return EXIT_FAIL
        except Exception as e:
            logger.error("Grader failed: %s", e, exc_info=True)
            print(f"❌ Grader Error: {e}", file=sys.stderr)
            return EXIT_FAIL

        return self.exit_code(report)

    @staticmethod
    def exit_code(report: Report) -> int:
        return EXIT_PASS if report.passed else EXIT_FAIL
