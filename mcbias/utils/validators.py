"""
Validation utilities for Monte Carlo bias analysis.

This module provides validation functions for scenario parameters,
power-analysis inputs, and simulation settings.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import numpy as np

__all__ = ["InvalidParameter"]


class InvalidParameter(ValueError):
    """Raised when a probability, sample size, or iteration count is out of range."""

    pass


@dataclass
class _ValidationResult:
    """Outcome of a validation check, carrying errors and warnings.

    Attributes:
        is_valid: ``True`` if no errors were found.
        errors: List of error messages (empty when valid).
        warnings: List of non-fatal warning messages.
    """

    is_valid: bool
    errors: List[str]
    warnings: List[str]

    def raise_if_invalid(self):
        """Raise ``InvalidParameter`` if the validation failed."""
        if not self.is_valid:
            if len(self.errors) == 1:
                raise InvalidParameter(self.errors[0])
            error_msg = "Validation failed:\n" + "\n".join(f"• {err}" for err in self.errors)
            raise InvalidParameter(error_msg)


class _Validator:
    """Static helpers for type and range checks used by all validators."""

    @staticmethod
    def _check_type(value: Any, expected_types: tuple, name: str) -> Optional[str]:
        """Check if value has expected type."""
        # bool is an int subclass but never a meaningful probability or count
        if isinstance(value, bool) or not isinstance(value, expected_types):
            actual_type = type(value).__name__
            expected = expected_types[0].__name__ if len(expected_types) == 1 else f"one of {[t.__name__ for t in expected_types]}"
            return f"{name} must be {expected}, got {actual_type}"
        return None

    @staticmethod
    def _check_range(
        value: Union[int, float],
        min_val: Optional[float],
        max_val: Optional[float],
        name: str,
        exclusive: bool = False,
    ) -> Optional[str]:
        """Check if value is within range."""
        if exclusive:
            if min_val is not None and value <= min_val:
                return f"{name} must be > {min_val}, got {value}"
            if max_val is not None and value >= max_val:
                return f"{name} must be < {max_val}, got {value}"
            return None
        if min_val is not None and value < min_val:
            return f"{name} must be >= {min_val}, got {value}"
        if max_val is not None and value > max_val:
            return f"{name} must be <= {max_val}, got {value}"
        return None


_validator = _Validator()

_NUMERIC = (int, float, np.integer, np.floating)
_INTEGER = (int, np.integer)


def _validate_numeric_parameter(
    value: Any,
    name: str,
    expected_types: tuple = _NUMERIC,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    exclusive: bool = False,
) -> _ValidationResult:
    """Generic validation for numeric parameters."""
    errors: List[str] = []
    warnings: List[str] = []

    type_error = _validator._check_type(value, expected_types, name)
    if type_error:
        errors.append(type_error)
        return _ValidationResult(False, errors, warnings)

    if value != value:  # NaN
        errors.append(f"{name} must be a number, got nan")
        return _ValidationResult(False, errors, warnings)

    range_error = _validator._check_range(value, min_val, max_val, name, exclusive)
    if range_error:
        errors.append(range_error)

    return _ValidationResult(len(errors) == 0, errors, warnings)


def _validate_probability(value: Any, name: str = "probability") -> _ValidationResult:
    """Validate a probability in the closed interval [0, 1]."""
    return _validate_numeric_parameter(value, name, min_val=0, max_val=1)


def _validate_accuracy(accuracy: Any) -> _ValidationResult:
    """Validate labelling accuracy (0-1)."""
    result = _validate_probability(accuracy, "accuracy")
    if result.is_valid and accuracy < 0.5:
        result.warnings.append(f"accuracy {accuracy} is below 0.5: observed labels are mostly flipped")
    return result


def _validate_true_utilization(true_utilization: Any) -> _ValidationResult:
    """Validate the population utilization rate (0-1)."""
    return _validate_probability(true_utilization, "true_utilization")


def _validate_alpha(alpha: Any) -> _ValidationResult:
    """Validate significance level (strictly between 0 and 1)."""
    return _validate_numeric_parameter(alpha, "alpha", min_val=0, max_val=1, exclusive=True)


def _validate_power(power: Any) -> _ValidationResult:
    """Validate target power given as a percentage (0-100)."""
    return _validate_numeric_parameter(power, "power", min_val=0, max_val=100, exclusive=True)


def _validate_sample_size(sample_size: Any) -> _ValidationResult:
    """Validate sample size parameter (integer >= 1)."""
    errors = []

    if isinstance(sample_size, bool) or not isinstance(sample_size, _INTEGER):
        errors.append(f"sample_size must be an integer, got {type(sample_size).__name__}")
        return _ValidationResult(False, errors, [])

    if sample_size < 1:
        errors.append(f"sample_size must be at least 1, got {sample_size}")

    return _ValidationResult(len(errors) == 0, errors, [])


def _validate_nobs(nobs: Any) -> _ValidationResult:
    """Validate the (possibly fractional) number of observations of a power calculation."""
    return _validate_numeric_parameter(nobs, "nobs", min_val=0, exclusive=True)


def _validate_iterations(n_iterations: Any) -> Tuple[int, _ValidationResult]:
    """Validate and process number of Monte Carlo iterations."""
    errors: List[str] = []
    warnings: List[str] = []

    if isinstance(n_iterations, bool) or not isinstance(n_iterations, _INTEGER):
        errors.append(f"n_iterations must be an integer, got {type(n_iterations).__name__}")
        return 0, _ValidationResult(False, errors, warnings)

    if n_iterations < 1:
        errors.append(f"n_iterations must be at least 1, got {n_iterations}")
        return 0, _ValidationResult(False, errors, warnings)

    if n_iterations < 1000:
        warnings.append(f"Low iteration count ({n_iterations}). Consider using at least 1000 for smooth density estimates.")

    return int(n_iterations), _ValidationResult(True, errors, warnings)


def _validate_alternative(alternative: Any) -> _ValidationResult:
    """Validate the alternative hypothesis name."""
    valid = ("two-sided", "larger", "smaller")
    if alternative not in valid:
        return _ValidationResult(
            False,
            [f"alternative must be one of {', '.join(repr(v) for v in valid)}, got {alternative!r}"],
            [],
        )
    return _ValidationResult(True, [], [])


def _validate_scenario(name: Any, sample_size: Any, accuracy: Any) -> _ValidationResult:
    """Validate a full scenario specification, collecting every error."""
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(name, str) or not name.strip():
        errors.append("scenario name must be a non-empty string")

    for result in (_validate_sample_size(sample_size), _validate_accuracy(accuracy)):
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    return _ValidationResult(len(errors) == 0, errors, warnings)
