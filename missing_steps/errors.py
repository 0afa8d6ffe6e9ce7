from __future__ import annotations


class MissingStepsError(Exception):
    """Base class for errors raised by missing_steps."""


class FeatureParseError(MissingStepsError):
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Unable to parse feature file {path or '<text>'}: {message}")


class FeatureReadError(MissingStepsError, OSError):
    """A feature file exists but its bytes are not valid UTF-8."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Unable to read feature file {path}: {message}")
