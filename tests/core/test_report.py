# tests/core/test_report.py
import io

import pytest

from pagegrader.controllers.report_controller import ReportController
from pagegrader.model import CheckResult, GradeWarning, Report


@pytest.fixture(autouse=True)
def no_ci_summary(monkeypatch):
    """Tests mogen nooit naar een echte CI-samenvatting schrijven."""
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)


@pytest.fixture
def report():
    return Report(
        profile="media",
        title="Test Report",
        pass_threshold=8,
        checklist=["Images: Minimum 3 required"],
        results=[
            CheckResult(category="Images Required", awarded=2, possible=2, message="Found 3 images."),
            CheckResult(category="Text Styling", awarded=1, possible=2, message="Only 1 text property used."),
            CheckResult(category="License Information", awarded=0, possible=2, message="No license info found."),
        ],
    )


@pytest.fixture
def controller():
    return ReportController(summary_env_var="GITHUB_STEP_SUMMARY")


def test_markdown_table_and_total(controller, report):
    """Test de tabel, iconen en totaalscore in het Markdown-rapport."""
    md = controller.render_markdown(report)
    assert "# Test Report" in md
    assert "| Status | Category | Score | Feedback |" in md
    assert "| ✅ | **Images Required** | 2/2 | Found 3 images. |" in md
    assert "| ⚠️ | **Text Styling** | 1/2 | Only 1 text property used. |" in md
    assert "| ❌ | **License Information** | 0/2 | No license info found. |" in md
    assert "### 🏆 Total Score: 3 / 6" in md
    assert "- ✅ Images: Minimum 3 required" in md


def test_warnings_section_omitted_when_empty(controller, report):
    assert "Notes for Review" not in controller.render_markdown(report)


def test_warnings_section_lists_warnings(controller, report):
    report.warnings.append(GradeWarning(title="No CSS File", message="No .css file found."))
    md = controller.render_markdown(report)
    assert "### ⚠️ Notes for Review:" in md
    assert "- ⚠️ **No CSS File:** No .css file found." in md
    assert md.index("Notes for Review") < md.index("Checklist")


def test_console_rendition_without_color(controller, report):
    text = controller.render_console(report, color=False)
    assert "\033[" not in text
    assert "TOTAL ESTIMATED SCORE: 3 / 6" in text
    assert "push a new commit" in text


def test_console_rendition_with_color(controller, report):
    assert "\033[32m" in controller.render_console(report, color=True)


def test_publish_writes_file_and_stdout(controller, report, tmp_path):
    target = tmp_path / "grading-feedback.md"
    target.write_text("old report", encoding="utf-8")
    out = io.StringIO()

    md = controller.publish(report, report_path=target, stream=out)

    assert target.read_text(encoding="utf-8") == md
    assert out.getvalue() == md


def test_publish_appends_to_ci_summary(controller, report, tmp_path, monkeypatch):
    """Het rapport wordt toegevoegd aan de CI-samenvatting, niet overschreven."""
    summary = tmp_path / "summary.md"
    summary.write_text("previous step\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary))

    md = controller.publish(report, report_path=None, stream=io.StringIO())

    assert summary.read_text(encoding="utf-8") == "previous step\n" + md


def test_ci_summary_failure_is_not_fatal(controller, report, tmp_path, monkeypatch):
    """Een onschrijfbare CI-samenvatting laat de run niet falen."""
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(tmp_path))  # a directory
    out = io.StringIO()

    controller.publish(report, report_path=None, stream=out)

    assert controller.append_ci_summary("x") is False
    assert "Total Score" in out.getvalue()


def test_status_icon_tiers():
    assert CheckResult(category="a", awarded=2, possible=2, message="").status_icon == "✅"
    assert CheckResult(category="a", awarded=1, possible=2, message="").status_icon == "⚠️"
    assert CheckResult(category="a", awarded=0, possible=2, message="").status_icon == "❌"
