class GraderError(Exception):
    """Base class for every error the grader raises on purpose."""


class SubmissionNotFoundError(GraderError):
    """The required HTML submission file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} not found")


class UnknownProfileError(GraderError):
    """No rubric profile is registered under the requested name."""

    def __init__(self, name, known):
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Unknown rubric profile '{name}'. Available: {', '.join(self.known) or '(none)'}"
        )
