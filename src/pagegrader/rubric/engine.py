# src/pagegrader/rubric/engine.py
import logging

from pagegrader.model import Report
from .core import GradingContext, RubricDefinition

logger = logging.getLogger(__name__)


class RubricEngine:
    """
    Runs every check and warning of a rubric profile against one submission.
    Checks are independent of each other; the report keeps the profile's order.
    """

    def __init__(self, profile: RubricDefinition):
        self.profile = profile

    def run(self, ctx: GradingContext) -> Report:
        """
        Evaluates the full rubric.

        Args:
            ctx (GradingContext): Parsed page plus raw HTML and CSS.

        Returns:
            Report: Scored results, fired warnings and the pass threshold.
        """
        report = Report(
            profile=self.profile.name,
            title=self.profile.title,
            pass_threshold=self.profile.pass_threshold,
            checklist=self.profile.checklist,
        )

        for check in self.profile.checks:
            result = check(ctx)
            logger.debug("%s: %d/%d", result.category, result.awarded, result.possible)
            report.results.append(result)

        for warning_check in self.profile.warnings:
            warning = warning_check(ctx)
            if warning:
                logger.debug("Warning fired: %s", warning.title)
                report.warnings.append(warning)

        logger.info(
            "Profile '%s' scored %d/%d (%d warnings)",
            self.profile.name, report.score, report.max_score, len(report.warnings)
        )
        return report
