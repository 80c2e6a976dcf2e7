"""
Tests for results processing and result dict builders.
"""

import numpy as np
import pytest

from mcbias.core import (
    ResultsProcessor,
    Scenario,
    build_power_result,
    build_sample_size_result,
    build_simulation_result,
)


@pytest.fixture
def scenario():
    return Scenario("s", 100, 0.9)


class TestSummarize:
    def test_known_values(self, scenario):
        means = np.array([0.1, 0.2, 0.3, 0.4])
        summary = ResultsProcessor(true_utilization=0.2).summarize(means, scenario)

        assert summary["n_iterations"] == 4
        assert summary["mean"] == pytest.approx(0.25)
        assert summary["std"] == pytest.approx(np.std(means, ddof=1))
        assert summary["bias"] == pytest.approx(0.05)
        assert summary["rmse"] == pytest.approx(np.sqrt(np.mean((means - 0.2) ** 2)))
        assert summary["lower"] <= summary["mean"] <= summary["upper"]

    def test_expected_mean(self, scenario):
        summary = ResultsProcessor(0.2).summarize(np.array([0.26, 0.27]), scenario)
        assert summary["expected_mean"] == pytest.approx(0.2 * 0.9 + 0.8 * 0.1)

    def test_single_value_zero_std(self, scenario):
        summary = ResultsProcessor(0.2).summarize(np.array([0.3]), scenario)
        assert summary["std"] == 0.0
        assert summary["lower"] == summary["upper"] == pytest.approx(0.3)

    def test_unbiased_has_rmse_equal_to_population_sd(self, scenario):
        means = np.array([0.1, 0.3])
        summary = ResultsProcessor(0.2).summarize(means, scenario)
        assert summary["bias"] == pytest.approx(0.0)
        assert summary["rmse"] == pytest.approx(0.1)


class TestProcessSimulations:
    def test_samples_optional(self, scenario):
        samples = {"s": np.array([0.2, 0.25])}
        proc = ResultsProcessor(0.2)
        assert "samples" not in proc.process_simulations(samples, [scenario])
        assert proc.process_simulations(samples, [scenario], include_samples=True)["samples"] is samples


class TestBuilders:
    def test_simulation_result_shape(self, scenario):
        result = build_simulation_result([scenario], 0.2, 1000, 7, {"summaries": {}})
        assert set(result) == {"model", "results"}
        assert result["model"]["analysis"] == "simulation"
        assert result["model"]["scenarios"][0]["name"] == "s"
        assert result["model"]["seed"] == 7

    def test_power_result_shape(self, scenario):
        effect = {"p1": 0.23, "p2": 0.44, "effect_size": -0.44}
        powers = {"s": {"sample_size": 100, "power": 97.0}}
        result = build_power_result([scenario], 0.2, 0.05, "two-sided", "observed", effect, powers)
        assert result["model"]["reference"] == "observed"
        assert result["results"]["powers"] is powers

    def test_sample_size_rounds_up(self):
        effect = {"p1": 0.2, "p2": 0.3, "effect_size": -0.23}
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, effect, 148.3)
        assert result["results"]["required_sample_size"] == 149

    def test_sample_size_exact_integer_not_bumped(self):
        effect = {"p1": 0.2, "p2": 0.3, "effect_size": -0.23}
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, effect, 150.0)
        assert result["results"]["required_sample_size"] == 150

    @pytest.mark.parametrize("required_n", [5e-10, 1e-3, 0.999999])
    def test_sample_size_at_least_one_subject(self, required_n):
        effect = {"p1": 0.0, "p2": 1.0, "effect_size": -3.14}
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, effect, required_n)
        assert result["results"]["required_sample_size"] == 1
        assert result["results"]["required_n"] == required_n

    def test_sample_size_none(self):
        effect = {"p1": 0.2, "p2": 0.2, "effect_size": 0.0}
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, effect, None)
        assert result["results"]["required_sample_size"] is None
