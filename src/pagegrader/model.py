from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Submission(BaseModel):
    """
    The student's work as found on disk: the HTML text, the text of the
    first stylesheet (empty when there is none) and every stylesheet name
    that was discovered.
    """
    model_config = ConfigDict(frozen=True)

    work_dir: Path
    html: str
    css: str = ""
    css_files: Tuple[str, ...] = ()

    @property
    def has_stylesheet(self) -> bool:
        return bool(self.css_files)


class CheckResult(BaseModel):
    """
    Outcome of a single scored rubric check.
    """
    category: str
    awarded: int = Field(ge=0)
    possible: int = Field(gt=0)
    message: str

    @model_validator(mode='after')
    def check_bounds(self) -> 'CheckResult':
        if self.awarded > self.possible:
            raise ValueError(
                f"{self.category}: awarded {self.awarded} exceeds possible {self.possible}"
            )
        return self

    @property
    def status_icon(self) -> str:
        """✅ full marks, ⚠️ partial, ❌ nothing."""
        if self.awarded == self.possible:
            return "✅"
        if self.awarded > 0:
            return "⚠️"
        return "❌"


class GradeWarning(BaseModel):
    """Advisory note. Never affects the score."""
    title: str
    message: str


class Report(BaseModel):
    """
    Aggregated result of one grading run.
    Results and warnings keep the order in which the profile defines them.
    """
    profile: str
    title: str
    results: List[CheckResult] = Field(default_factory=list)
    warnings: List[GradeWarning] = Field(default_factory=list)
    pass_threshold: int
    checklist: List[str] = Field(default_factory=list)

    @property
    def score(self) -> int:
        return sum(r.awarded for r in self.results)

    @property
    def max_score(self) -> int:
        return sum(r.possible for r in self.results)

    @property
    def passed(self) -> bool:
        return self.score >= self.pass_threshold

    def get_result(self, category: str) -> Optional[CheckResult]:
        """Looks up a result by its category name."""
        for result in self.results:
            if result.category == category:
                return result
        return None
