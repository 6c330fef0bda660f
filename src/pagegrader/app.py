from __future__ import annotations

import argparse
import logging
import sys

from pagegrader.controllers.grade_controller import EXIT_FAIL, GradeController
from pagegrader.managers.config_manager import config_manager
from pagegrader.rubric.registry import RubricRegistry
from pagegrader.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagegrader",
        description="Grade a static web page (index.html + stylesheet) against a fixed rubric."
    )
    parser.add_argument("--dir", dest="work_dir", default=None,
                        help="Directory holding the submission (default: current directory).")
    parser.add_argument("--profile", default=None,
                        help="Rubric profile to grade with (default from settings.json).")
    parser.add_argument("--report", dest="report_file", default=None,
                        help="Feedback file to write, relative to the submission directory.")
    parser.add_argument("--no-report", action="store_true",
                        help="Do not write the feedback file.")
    parser.add_argument("--color", dest="console_style", action="store_const", const="ansi", default=None,
                        help="Print a coloured line-per-check summary instead of Markdown.")
    parser.add_argument("--plain", dest="console_style", action="store_const", const="plain",
                        help="Print the line-per-check summary without colour.")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--list-profiles", action="store_true",
                        help="List the available rubric profiles and exit.")
    return parser


def _list_profiles() -> int:
    for name in RubricRegistry.get_profile_names():
        profile = RubricRegistry.get_profile(name)
        print(f"{name:<12} {profile.max_score:>3} pts  pass >= {profile.pass_threshold}  {profile.title}")
    return 0


def _apply_overrides(args: argparse.Namespace) -> None:
    """Command line options win over settings.json for the rest of the run."""
    overrides = {
        "debug.level": args.log_level,
        "grader.profile": args.profile,
        "report.file": args.report_file,
    }
    for key_path, value in overrides.items():
        if value is not None:
            config_manager.set_nested(key_path, value)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for grading from the command line. Returns the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits 0; bad arguments are a failed run
        return 0 if e.code in (0, None) else EXIT_FAIL

    _apply_overrides(args)
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        module_levels=config_manager.get_nested("debug.module_levels", {}),
        silenced_loggers=config_manager.get_nested("debug.silenced_loggers", {}),
    )

    if args.list_profiles:
        return _list_profiles()

    controller = GradeController(
        work_dir=args.work_dir,
        write_report=not args.no_report,
        console_style=args.console_style,
    )
    return controller.run()


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
