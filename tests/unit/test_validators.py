"""
Tests for validation utilities.
"""

import numpy as np
import pytest

from mcbias.utils.validators import (
    InvalidParameter,
    _validate_accuracy,
    _validate_alpha,
    _validate_alternative,
    _validate_iterations,
    _validate_nobs,
    _validate_power,
    _validate_probability,
    _validate_sample_size,
    _validate_scenario,
    _ValidationResult,
)


class TestValidationResult:
    def test_valid_does_not_raise(self):
        _ValidationResult(True, [], []).raise_if_invalid()

    def test_single_error_message(self):
        with pytest.raises(InvalidParameter, match="^boom$"):
            _ValidationResult(False, ["boom"], []).raise_if_invalid()

    def test_multiple_errors_joined(self):
        with pytest.raises(InvalidParameter, match="Validation failed") as exc:
            _ValidationResult(False, ["first", "second"], []).raise_if_invalid()
        assert "first" in str(exc.value)
        assert "second" in str(exc.value)

    def test_invalid_parameter_is_value_error(self):
        assert issubclass(InvalidParameter, ValueError)


class TestProbability:
    @pytest.mark.parametrize("value", [0, 0.0, 0.5, 1, 1.0, np.float64(0.3)])
    def test_valid(self, value):
        assert _validate_probability(value, "p").is_valid

    @pytest.mark.parametrize("value", [-0.01, 1.01, float("nan")])
    def test_out_of_range(self, value):
        result = _validate_probability(value, "p")
        assert not result.is_valid
        assert "p" in result.errors[0]

    @pytest.mark.parametrize("value", ["0.5", None, True, [0.5]])
    def test_wrong_type(self, value):
        assert not _validate_probability(value, "p").is_valid


class TestAccuracy:
    def test_low_accuracy_warns(self):
        result = _validate_accuracy(0.3)
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_high_accuracy_no_warning(self):
        assert _validate_accuracy(0.95).warnings == []


class TestAlpha:
    @pytest.mark.parametrize("alpha", [0.001, 0.05, 0.5, 0.999])
    def test_valid(self, alpha):
        assert _validate_alpha(alpha).is_valid

    @pytest.mark.parametrize("alpha", [0, 1, -0.1, 1.5])
    def test_boundaries_rejected(self, alpha):
        assert not _validate_alpha(alpha).is_valid


class TestPower:
    def test_percentage_range(self):
        assert _validate_power(80).is_valid
        assert not _validate_power(0).is_valid
        assert not _validate_power(100).is_valid
        assert not _validate_power(150).is_valid


class TestSampleSize:
    @pytest.mark.parametrize("n", [1, 500, np.int64(5000)])
    def test_valid(self, n):
        assert _validate_sample_size(n).is_valid

    @pytest.mark.parametrize("n", [0, -5])
    def test_non_positive(self, n):
        result = _validate_sample_size(n)
        assert not result.is_valid
        assert "at least 1" in result.errors[0]

    @pytest.mark.parametrize("n", [10.0, "10", None, True])
    def test_non_integer(self, n):
        result = _validate_sample_size(n)
        assert not result.is_valid
        assert "integer" in result.errors[0]


class TestNobs:
    def test_fractional_allowed(self):
        assert _validate_nobs(12.5).is_valid

    @pytest.mark.parametrize("n", [0, -1.0])
    def test_non_positive_rejected(self, n):
        assert not _validate_nobs(n).is_valid


class TestIterations:
    def test_valid_returns_int(self):
        n, result = _validate_iterations(1000)
        assert n == 1000
        assert result.is_valid
        assert result.warnings == []

    def test_low_count_warns(self):
        n, result = _validate_iterations(10)
        assert n == 10
        assert result.is_valid
        assert "Low iteration count" in result.warnings[0]

    @pytest.mark.parametrize("n", [0, -1])
    def test_non_positive(self, n):
        _, result = _validate_iterations(n)
        assert not result.is_valid

    def test_float_rejected(self):
        _, result = _validate_iterations(100.0)
        assert not result.is_valid


class TestAlternative:
    @pytest.mark.parametrize("alt", ["two-sided", "larger", "smaller"])
    def test_valid(self, alt):
        assert _validate_alternative(alt).is_valid

    def test_invalid(self):
        assert not _validate_alternative("both").is_valid


class TestScenario:
    def test_collects_all_errors(self):
        result = _validate_scenario("", 0, 2.0)
        assert not result.is_valid
        assert len(result.errors) == 3

    def test_valid(self):
        assert _validate_scenario("ok", 10, 0.9).is_valid
