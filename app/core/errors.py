class SubmissionFormatError(ValueError):
    """Score submission has the wrong shape (name not a string, score not a number)."""

    message = "Invalid input data format"


class SubmissionValueError(ValueError):
    """Score submission is well-formed but out of range (blank name, negative score)."""

    message = "Invalid name or score value"


class StoreError(RuntimeError):
    """A single key-value store call failed."""


class StoreUnavailableError(RuntimeError):
    """The store kept failing after the retry budget was spent."""

    def __init__(self, operation: str, attempts: int):
        super().__init__(f"{operation} failed after {attempts} attempts")
        self.operation = operation
        self.attempts = attempts
