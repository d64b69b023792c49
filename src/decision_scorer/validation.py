"""Request validation for the decision engine.

The engine assumes its input is valid; this module establishes that.
Checks produce readable messages rather than stopping at the first
problem, so a caller can fix everything in one pass.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import FeaturePathError, RequestValidationError
from .paths import collect_feature_paths, split_path
from .schema import Algorithm, ComparisonRequest, ConstraintOperator, Optimization

WEIGHT_SUM_TOLERANCE = 0.01

VALID_OPERATORS = [op.value for op in ConstraintOperator]
VALID_OPTIMIZATIONS = [o.value for o in Optimization]
IMPLEMENTED_ALGORITHMS = [a.value for a in Algorithm.implemented()]
RECOGNIZED_ALGORITHMS = [a.value for a in Algorithm]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def _find_duplicates(items: list[Any]) -> list[Any]:
    seen = set()
    duplicates = []
    for item in items:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


def _validate_criteria(criteria: Any, prefix: str) -> list[str]:
    if not criteria:
        return [f"{prefix}: 'criteria' field is required"]
    if not isinstance(criteria, str):
        return [f"{prefix}: 'criteria' must be a string"]
    try:
        split_path(criteria)
    except FeaturePathError:
        return [f"{prefix}: 'criteria' is a malformed path: '{criteria}'"]
    return []


def validate_options(options: Any) -> list[str]:
    """Validate the options array and each option's structure."""
    if options is None:
        return ["Options field is required"]
    if not isinstance(options, list):
        return ["Options must be an array"]
    if not options:
        return ["At least one option is required"]

    errors = []
    if len(options) < 2:
        errors.append("At least two options are required for meaningful comparison")

    for index, option in enumerate(options, 1):
        errors.extend(_validate_option(option, index))

    # Non-string ids are already reported and cannot be hashed
    ids = [
        o["id"] for o in options
        if isinstance(o, Mapping) and isinstance(o.get("id"), str) and o["id"]
    ]
    duplicates = _find_duplicates(ids)
    if duplicates:
        errors.append(f"Duplicate option IDs found: {', '.join(map(str, duplicates))}")

    return errors


def _validate_option(option: Any, index: int) -> list[str]:
    prefix = f"Option {index}"
    if not isinstance(option, Mapping):
        return [f"{prefix}: must be an object"]

    errors = []
    for field in ("id", "name"):
        if not option.get(field):
            errors.append(f"{prefix}: '{field}' field is required")
        elif not isinstance(option[field], str):
            errors.append(f"{prefix}: '{field}' must be a string")

    features = option.get("features")
    if not features and not isinstance(features, Mapping):
        errors.append(f"{prefix}: 'features' field is required")
    elif not isinstance(features, Mapping):
        errors.append(f"{prefix}: 'features' must be an object")
    elif not features:
        errors.append(f"{prefix}: 'features' cannot be empty")

    return errors


def validate_constraints(constraints: Any) -> list[str]:
    """Validate the constraints array (may be empty)."""
    if constraints is None:
        return ["Constraints field is required"]
    if not isinstance(constraints, list):
        return ["Constraints must be an array"]

    errors = []
    for index, constraint in enumerate(constraints, 1):
        errors.extend(_validate_constraint(constraint, index))
    return errors


def _validate_constraint(constraint: Any, index: int) -> list[str]:
    prefix = f"Constraint {index}"
    if not isinstance(constraint, Mapping):
        return [f"{prefix}: must be an object"]

    errors = _validate_criteria(constraint.get("criteria"), prefix)

    operator = constraint.get("operator")
    if not operator:
        errors.append(f"{prefix}: 'operator' field is required")
    elif operator not in VALID_OPERATORS:
        errors.append(f"{prefix}: 'operator' must be one of: {', '.join(VALID_OPERATORS)}")

    if constraint.get("value") is None:
        errors.append(f"{prefix}: 'value' field is required")

    if "required" in constraint and not isinstance(constraint["required"], bool):
        errors.append(f"{prefix}: 'required' must be a boolean")

    return errors


def validate_priorities(priorities: Any) -> list[str]:
    """Validate the priorities array, weights and optimization directions."""
    if priorities is None:
        return ["Priorities field is required"]
    if not isinstance(priorities, list):
        return ["Priorities must be an array"]
    if not priorities:
        return ["At least one priority is required"]

    errors = []
    for index, priority in enumerate(priorities, 1):
        errors.extend(_validate_priority(priority, index))

    weights = [
        p["weight"] for p in priorities
        if isinstance(p, Mapping) and _is_number(p.get("weight"))
    ]
    if weights:
        total = sum(weights)
        if abs(total - 1) > WEIGHT_SUM_TOLERANCE:
            errors.append(f"Priority weights must sum to 1.0 (current sum: {total:.3f})")

    criteria = [
        p["criteria"] for p in priorities
        if isinstance(p, Mapping) and isinstance(p.get("criteria"), str) and p["criteria"]
    ]
    duplicates = _find_duplicates(criteria)
    if duplicates:
        errors.append(f"Duplicate priority criteria found: {', '.join(map(str, duplicates))}")

    return errors


def _validate_priority(priority: Any, index: int) -> list[str]:
    prefix = f"Priority {index}"
    if not isinstance(priority, Mapping):
        return [f"{prefix}: must be an object"]

    errors = _validate_criteria(priority.get("criteria"), prefix)

    weight = priority.get("weight")
    if weight is None:
        errors.append(f"{prefix}: 'weight' field is required")
    elif not _is_number(weight):
        errors.append(f"{prefix}: 'weight' must be a number")
    elif weight < 0 or weight > 1:
        errors.append(f"{prefix}: 'weight' must be between 0 and 1 (got {weight})")

    optimization = priority.get("optimization")
    if not optimization:
        errors.append(f"{prefix}: 'optimization' field is required")
    elif optimization not in VALID_OPTIMIZATIONS:
        errors.append(f"{prefix}: 'optimization' must be either 'minimize' or 'maximize'")

    return errors


def validate_settings(settings: Any) -> list[str]:
    """Validate the optional settings object."""
    if settings is None:
        return []
    if not isinstance(settings, Mapping):
        return ["Settings must be an object"]

    errors = []
    algorithm = settings.get("algorithm")
    if algorithm is not None:
        if algorithm not in RECOGNIZED_ALGORITHMS:
            errors.append(
                f"Settings 'algorithm' must be one of: {', '.join(IMPLEMENTED_ALGORITHMS)}"
            )
        elif algorithm not in IMPLEMENTED_ALGORITHMS:
            errors.append(
                f"Settings 'algorithm' '{algorithm}' is not implemented; "
                f"use one of: {', '.join(IMPLEMENTED_ALGORITHMS)}"
            )

    if "include_explanations" in settings and not isinstance(settings["include_explanations"], bool):
        errors.append("Settings 'include_explanations' must be a boolean")

    if "max_results" in settings and settings["max_results"] is not None:
        max_results = settings["max_results"]
        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            errors.append("Settings 'max_results' must be a positive integer")

    return errors


def validate_criteria_existence(options: list[Any], priorities: list[Any]) -> list[str]:
    """Check that each priority criterion is a feature path of some option."""
    known: set[str] = set()
    for option in options:
        features = option.get("features") if isinstance(option, Mapping) else None
        if isinstance(features, Mapping):
            known |= collect_feature_paths(features)

    return [
        f"Priority criteria '{p['criteria']}' not found in any option features"
        for p in priorities
        if isinstance(p, Mapping) and isinstance(p.get("criteria"), str) and p["criteria"]
        and p["criteria"] not in known
    ]


def validate_request(payload: Any) -> tuple[bool, list[str]]:
    """Validate a complete request body.

    Args:
        payload: Decoded JSON body with options, constraints, priorities, settings

    Returns:
        Tuple of (is_valid, list of issues)
    """
    if not isinstance(payload, Mapping) or not payload:
        return False, ["Request body is required"]

    options = payload.get("options")
    priorities = payload.get("priorities")

    option_errors = validate_options(options)
    priority_errors = validate_priorities(priorities)
    errors = (
        option_errors
        + validate_constraints(payload.get("constraints"))
        + priority_errors
        + validate_settings(payload.get("settings"))
    )

    # Cross-validation only makes sense on well-formed sections
    if not option_errors and not priority_errors:
        errors.extend(validate_criteria_existence(options, priorities))

    return len(errors) == 0, errors


def parse_request(payload: Any) -> ComparisonRequest:
    """Validate a request body and parse it into a ComparisonRequest.

    Raises:
        RequestValidationError: With every issue found
    """
    is_valid, errors = validate_request(payload)
    if not is_valid:
        raise RequestValidationError(errors)

    try:
        return ComparisonRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError([
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]) from e
