"""
Custom exceptions for the decision scorer.
"""
from typing import Optional


class DecisionScorerError(Exception):
    """Base exception for the decision scorer."""
    pass


class FeaturePathError(DecisionScorerError, ValueError):
    """Exception raised for a malformed dotted feature path."""
    def __init__(self, path: object, message: Optional[str] = None):
        self.path = path
        self.message = message or f"Malformed feature path: {path!r}"
        super().__init__(self.message)


class FeatureTypeError(DecisionScorerError, TypeError):
    """Exception raised when a feature value cannot be used as a number."""
    def __init__(self, value: object, criteria: Optional[str] = None):
        self.value = value
        self.criteria = criteria
        where = f" for '{criteria}'" if criteria else ""
        self.message = f"Expected a numeric value{where}, got {value!r}"
        super().__init__(self.message)


class RequestValidationError(DecisionScorerError):
    """Exception raised when a comparison request fails validation."""
    def __init__(self, errors: list[str], message: str = "Validation failed"):
        self.errors = list(errors)
        self.message = message
        super().__init__(self.message)

    @property
    def error_count(self) -> int:
        return len(self.errors)


class UnsupportedAlgorithmError(DecisionScorerError):
    """Exception raised when a recognized but unimplemented algorithm is requested."""
    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        self.message = f"Scoring algorithm '{algorithm}' is not implemented; use weighted_sum"
        super().__init__(self.message)


class ComparisonProcessingError(DecisionScorerError):
    """Exception raised for an unexpected fault while running a comparison."""
    def __init__(self, message: str):
        self.message = f"Failed to process comparison: {message}"
        super().__init__(self.message)
