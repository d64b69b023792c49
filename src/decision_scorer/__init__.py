"""Multi-criteria decision scoring with explanations."""

__version__ = "1.0.0"

from .engine import DecisionEngine, compare_options
from .exceptions import (
    ComparisonProcessingError,
    DecisionScorerError,
    FeaturePathError,
    FeatureTypeError,
    RequestValidationError,
    UnsupportedAlgorithmError,
)
from .schema import (
    ComparisonRequest,
    ComparisonResult,
    Constraint,
    Option,
    Priority,
    Settings,
)
from .service import handle_comparison
from .validation import parse_request, validate_request

__all__ = [
    "__version__",
    "DecisionEngine",
    "compare_options",
    "handle_comparison",
    "parse_request",
    "validate_request",
    "ComparisonRequest",
    "ComparisonResult",
    "Constraint",
    "Option",
    "Priority",
    "Settings",
    "DecisionScorerError",
    "ComparisonProcessingError",
    "FeaturePathError",
    "FeatureTypeError",
    "RequestValidationError",
    "UnsupportedAlgorithmError",
]
