# tests/core/test_grade_controller.py
import copy
import io

import pytest
from unittest.mock import MagicMock

from pagegrader.app import main
from pagegrader.controllers.grade_controller import EXIT_FAIL, EXIT_PASS, GradeController
from pagegrader.managers.config_manager import config_manager
from pagegrader.model import CheckResult, Report

GALLERY = """<!DOCTYPE html>
<html>
<head><title>Gallery</title></head>
<body>
{figures}
</body>
</html>"""

FIGURE = '<figure><img src="{i}.jpg" class="{cls}"><figcaption>Photo by Jane, CC-BY</figcaption></figure>'


def write_gallery(path, images=3, css=None, cls="img-class"):
    figures = "\n".join(FIGURE.format(i=i, cls=cls) for i in range(images))
    (path / "index.html").write_text(GALLERY.format(figures=figures), encoding="utf-8")
    if css is not None:
        (path / "style.css").write_text(css, encoding="utf-8")


@pytest.fixture(autouse=True)
def no_ci_summary(monkeypatch):
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)


def run_grader(work_dir, **kwargs):
    out = io.StringIO()
    code = GradeController(work_dir=work_dir, stream=out, **kwargs).run()
    return code, out.getvalue()


def test_missing_submission_exits_one(tmp_path):
    """Scenario: geen index.html -> exitcode 1 en geen rapport."""
    code, out = run_grader(tmp_path)
    assert code == EXIT_FAIL
    assert out == ""
    assert not (tmp_path / "grading-feedback.md").exists()


def test_full_gallery_passes_with_eleven(tmp_path):
    write_gallery(tmp_path, css=".img-class { color: red; margin: 4px; background: blue; }")
    code, out = run_grader(tmp_path)

    assert code == EXIT_PASS
    report_text = (tmp_path / "grading-feedback.md").read_text(encoding="utf-8")
    assert "### 🏆 Total Score: 11 / 12" in report_text
    assert "| ⚠️ | **Text Styling** | 1/2 |" in report_text
    assert out == report_text


def test_empty_page_without_css_fails_but_writes_report(tmp_path):
    """Ook bij een onvoldoende wordt het rapport geschreven."""
    (tmp_path / "index.html").write_text("<html><body><h1>Hi</h1></body></html>", encoding="utf-8")
    code, _ = run_grader(tmp_path)

    assert code == EXIT_FAIL
    report_text = (tmp_path / "grading-feedback.md").read_text(encoding="utf-8")
    assert "**No CSS File:**" in report_text
    assert "| ❌ | **Images Required** | 0/2 |" in report_text


def test_score_of_eight_passes_and_seven_fails(tmp_path):
    """Drempelwaarde: 8 punten is voldoende, 7 niet."""
    pass_dir = tmp_path / "eight"
    fail_dir = tmp_path / "seven"
    pass_dir.mkdir()
    fail_dir.mkdir()
    # Images 2 + Attribution 2 + License 2 + Image Styling 2, no text/element credit
    write_gallery(pass_dir, images=3, css=".pic { border: 1px solid; }")
    write_gallery(fail_dir, images=2, css=".pic { border: 1px solid; }")

    assert GradeController(work_dir=pass_dir, stream=io.StringIO()).grade().score == 8
    assert GradeController(work_dir=fail_dir, stream=io.StringIO()).grade().score == 7
    assert run_grader(pass_dir)[0] == EXIT_PASS
    assert run_grader(fail_dir)[0] == EXIT_FAIL


@pytest.mark.parametrize("score, expected", [(12, EXIT_PASS), (8, EXIT_PASS), (7, EXIT_FAIL), (0, EXIT_FAIL)])
def test_exit_code_threshold(score, expected):
    results = [
        CheckResult(category=f"c{i}", awarded=min(2, max(0, score - 2 * i)), possible=2, message="")
        for i in range(6)
    ]
    report = Report(profile="media", title="t", pass_threshold=8, results=results)
    assert report.score == score
    assert GradeController.exit_code(report) == expected


def test_grading_is_idempotent(tmp_path):
    """Twee keer nakijken geeft exact hetzelfde rapport en dezelfde exitcode."""
    write_gallery(tmp_path, css=".img-class { color: red; }")
    first_code, first_out = run_grader(tmp_path)
    first_report = (tmp_path / "grading-feedback.md").read_text(encoding="utf-8")
    second_code, second_out = run_grader(tmp_path)
    second_report = (tmp_path / "grading-feedback.md").read_text(encoding="utf-8")

    assert first_code == second_code
    assert first_out == second_out
    assert first_report == second_report


def test_internal_error_exits_one(tmp_path):
    """Een onverwachte fout tijdens het nakijken levert exitcode 1 op."""
    write_gallery(tmp_path, css="")
    controller = GradeController(work_dir=tmp_path, stream=io.StringIO())
    controller.builder = MagicMock()
    controller.builder.parse_doc.side_effect = RuntimeError("boom")

    assert controller.run() == EXIT_FAIL
    assert not (tmp_path / "grading-feedback.md").exists()


def test_unknown_profile_exits_one(tmp_path):
    write_gallery(tmp_path)
    code, _ = run_grader(tmp_path, profile="nope")
    assert code == EXIT_FAIL


def test_no_report_option_skips_file(tmp_path):
    write_gallery(tmp_path, css=".img-class { color: red; margin: 0; padding: 0; font-size: 1em; }")
    code, out = run_grader(tmp_path, write_report=False)
    assert code == EXIT_PASS
    assert "Total Score: 12 / 12" in out
    assert not (tmp_path / "grading-feedback.md").exists()


def test_structure_profile_prints_console_lines(tmp_path):
    (tmp_path / "index.html").write_text("<html><body><h1>Hi</h1></body></html>", encoding="utf-8")
    code, out = run_grader(tmp_path, profile="structure", console_style="plain")
    assert code == EXIT_FAIL
    assert "TOTAL ESTIMATED SCORE: 0 / 12" in out


# --- Command line ---

def test_cli_grades_directory(tmp_path, capsys):
    write_gallery(tmp_path, css=".img-class { color: red; margin: 4px; background: blue; }")
    code = main(["--dir", str(tmp_path), "--no-report"])
    assert code == 0
    assert "Total Score: 11 / 12" in capsys.readouterr().out


def test_cli_missing_submission(tmp_path, capsys):
    assert main(["--dir", str(tmp_path)]) == 1
    assert "FATAL: index.html not found" in capsys.readouterr().err


def test_cli_list_profiles(capsys):
    assert main(["--list-profiles"]) == 0
    out = capsys.readouterr().out
    assert "media" in out
    assert "structure" in out


def test_cli_bad_argument():
    assert main(["--definitely-not-an-option"]) == 1


@pytest.fixture
def restore_config():
    """De CLI past de gedeelde configuratie aan; zet die na de test terug."""
    saved = copy.deepcopy(config_manager.get_all())
    yield config_manager
    config_manager._config = saved


def test_cli_overrides_go_through_config(tmp_path, capsys, restore_config):
    """--profile en --report komen via de configuratie bij de controller."""
    (tmp_path / "index.html").write_text("<html><body><h1>Hi</h1></body></html>", encoding="utf-8")

    code = main(["--dir", str(tmp_path), "--profile", "structure", "--report", "feedback.md", "--plain"])

    assert code == 1
    assert restore_config.get_nested("grader.profile") == "structure"
    assert restore_config.get_nested("report.file") == "feedback.md"
    assert "Auto-Grader Report for HTML Fan Page" in (tmp_path / "feedback.md").read_text(encoding="utf-8")
    assert not (tmp_path / "grading-feedback.md").exists()
    assert "TOTAL ESTIMATED SCORE: 0 / 12" in capsys.readouterr().out
