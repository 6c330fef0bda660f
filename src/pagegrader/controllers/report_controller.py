import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from pagegrader.managers.config_manager import config_manager
from pagegrader.model import Report

logger = logging.getLogger(__name__)

ANSI_CODES = {
    "bold": "\033[1m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "reset": "\033[0m",
}


def _ansi(text: str, *styles: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    prefix = "".join(ANSI_CODES[s] for s in styles)
    return f"{prefix}{text}{ANSI_CODES['reset']}"


class ReportController:
    """
    Turns a Report into text and delivers it: the Markdown report file,
    standard output and (optionally) the CI job summary.
    """

    def __init__(self, summary_env_var: Optional[str] = None):
        self.summary_env_var = summary_env_var or config_manager.get_nested(
            "report.summary_env_var", "GITHUB_STEP_SUMMARY"
        )

    # --- RENDERING ---

    def render_markdown(self, report: Report) -> str:
        """Full Markdown report, as written to the feedback file."""
        lines: List[str] = [
            "",
            f"# {report.title}",
            "",
            "| Status | Category | Score | Feedback |",
            "| :---: | :--- | :--- | :--- |",
        ]
        for r in report.results:
            lines.append(f"| {r.status_icon} | **{r.category}** | {r.awarded}/{r.possible} | {r.message} |")

        lines += ["", f"### 🏆 Total Score: {report.score} / {report.max_score}", ""]

        # The notes section is left out entirely when nothing fired
        if report.warnings:
            lines.append("### ⚠️ Notes for Review:")
            lines += [f"- ⚠️ **{w.title}:** {w.message}" for w in report.warnings]
            lines.append("")

        lines.append("### 📋 Checklist")
        lines += [f"- ✅ {item}" for item in report.checklist]
        return "\n".join(lines) + "\n"

    def render_console(self, report: Report, color: bool = True) -> str:
        """One line per check, coloured like a terminal grader."""
        rule = "=" * 40
        lines = [_ansi(f"\n{report.title}\n{rule}\n", "blue", "bold", enabled=color)]

        for r in report.results:
            tone = "green" if r.awarded == r.possible else ("yellow" if r.awarded > 0 else "red")
            lines.append(
                f"{r.status_icon} {_ansi(r.category, 'bold', enabled=color)} "
                f"({r.awarded}/{r.possible}): {_ansi(r.message, tone, enabled=color)}"
            )

        for w in report.warnings:
            lines.append(f"⚠️  {_ansi(w.title, 'bold', enabled=color)}: {_ansi(w.message, 'yellow', enabled=color)}")

        lines += [
            "",
            rule,
            _ansi(f"TOTAL ESTIMATED SCORE: {report.score} / {report.max_score}", "bold", enabled=color),
            rule,
        ]
        if report.passed:
            lines.append(_ansi("🚀 Excellent work! You are ready for the Gallery Walk.", "green", enabled=color))
        else:
            lines.append(_ansi(
                "⚠️  Review the feedback above and push a new commit to improve your score!",
                "yellow", enabled=color
            ))
        return "\n".join(lines) + "\n"

    # --- DELIVERY ---

    def write_report_file(self, markdown: str, path: Path) -> Path:
        """Writes (overwrites) the Markdown report file."""
        path.write_text(markdown, encoding="utf-8")
        logger.info("Report written to %s", path)
        return path

    def append_ci_summary(self, markdown: str) -> bool:
        """
        Appends the report to the CI summary file named by the configured
        environment variable. Failures are logged, never raised.
        """
        summary_path = os.environ.get(self.summary_env_var) if self.summary_env_var else None
        if not summary_path:
            return False

        try:
            with open(summary_path, "a", encoding="utf-8") as f:
                f.write(markdown)
            logger.debug("Report appended to CI summary %s", summary_path)
            return True
        except OSError as e:
            logger.warning("Could not append to CI summary %s: %s", summary_path, e)
            return False

    def publish(
            self,
            report: Report,
            report_path: Optional[Path] = None,
            console_style: str = "markdown",
            stream: Optional[TextIO] = None
    ) -> str:
        """
        Delivers the report to every destination and returns the Markdown text.

        Args:
            report: The finished report.
            report_path: Feedback file to overwrite; None skips the file.
            console_style: 'markdown' prints the Markdown report, 'ansi' a coloured
                           line-per-check rendition, 'plain' the same without colour.
            stream: Where the console rendition goes (defaults to stdout).
        """
        markdown = self.render_markdown(report)

        if report_path is not None:
            self.write_report_file(markdown, report_path)

        self.append_ci_summary(markdown)

        if console_style == "markdown":
            console_text = markdown
        else:
            console_text = self.render_console(report, color=(console_style == "ansi"))

        out = stream or sys.stdout
        out.write(console_text)
        out.flush()
        return markdown
