import functools
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from pagegrader.dom.document import ParsedDocument
from pagegrader.model import CheckResult, GradeWarning


class GradingContext(BaseModel):
    """
    Everything a check may look at: the parsed page plus the raw texts.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    doc: ParsedDocument
    html: str
    css: str = ""
    css_files: Tuple[str, ...] = ()


# A check body returns (points awarded, feedback message).
ScoreResult = Tuple[int, str]
CheckFunc = Callable[[GradingContext], CheckResult]
WarningFunc = Callable[[GradingContext], Optional[GradeWarning]]


def rubric_check(category: str, max_points: int):
    """
    Decorator declaring the category and point value of a scored check.

    The decorated function returns a ScoreResult; callers get a CheckResult
    back, so the awarded <= possible invariant is enforced in one place.
    """
    def decorator(func: Callable[[GradingContext], ScoreResult]) -> CheckFunc:
        @functools.wraps(func)
        def wrapper(ctx: GradingContext) -> CheckResult:
            awarded, message = func(ctx)
            return CheckResult(category=category, awarded=awarded, possible=max_points, message=message)

        wrapper.category = category
        wrapper.max_points = max_points
        return wrapper
    return decorator


def rubric_warning(title: str):
    """
    Decorator for advisory checks. The decorated function returns a message
    when the warning fires and None otherwise.
    """
    def decorator(func: Callable[[GradingContext], Optional[str]]) -> WarningFunc:
        @functools.wraps(func)
        def wrapper(ctx: GradingContext) -> Optional[GradeWarning]:
            message = func(ctx)
            if not message:
                return None
            return GradeWarning(title=title, message=message)

        wrapper.title = title
        return wrapper
    return decorator


class RubricDefinition:
    """
    Configuration object binding a profile name to its ordered checks,
    warnings and pass threshold.
    """

    def __init__(
            self,
            name: str,
            title: str,
            checks: Sequence[CheckFunc],
            warnings: Optional[Sequence[WarningFunc]] = None,
            pass_threshold: int = 8,
            checklist: Optional[List[str]] = None,
            console_style: str = "markdown"
    ):
        for check in checks:
            if not hasattr(check, 'category') or not hasattr(check, 'max_points'):
                raise ValueError(f"{getattr(check, '__name__', check)} is not decorated with @rubric_check")

        self.name = name
        self.title = title
        self.checks = list(checks)
        self.warnings = list(warnings or [])
        self.pass_threshold = pass_threshold
        self.checklist = list(checklist or [])
        self.console_style = console_style

    @property
    def categories(self) -> List[str]:
        return [check.category for check in self.checks]

    @property
    def max_score(self) -> int:
        return sum(check.max_points for check in self.checks)
