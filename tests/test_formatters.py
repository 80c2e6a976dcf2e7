"""
Tests for result formatting utilities.
"""

import pytest

from mcbias.core import (
    Scenario,
    build_power_result,
    build_sample_size_result,
    build_simulation_result,
)
from mcbias.utils.formatters import _format_results, _ResultFormatter, _TableFormatter

EFFECT = {"p1": 0.2312, "p2": 0.4405, "effect_size": -0.4402}


# ---------------------------------------------------------------------------
# TableFormatter
# ---------------------------------------------------------------------------
class TestTableFormatter:
    def setup_method(self):
        self.tf = _TableFormatter()

    def test_create_table_basic(self):
        table = self.tf._create_table(["Name", "Value"], [["alpha", "0.05"], ["beta", "0.20"]])
        lines = table.split("\n")
        assert len(lines) == 4  # header + separator + 2 rows
        assert "Name" in lines[0]
        assert set(lines[1].replace(" ", "")) == {"-"}
        assert "alpha" in lines[2]

    def test_create_table_custom_col_widths(self):
        table = self.tf._create_table(["A", "B"], [["x", "y"]], col_widths=[10, 10])
        separator = table.split("\n")[1]
        assert len(separator) == 21

    def test_create_table_no_rows(self):
        table = self.tf._create_table(["Scenario", "N"], [])
        assert table.split("\n")[1] == "-------- -"

    def test_format_value_float_small(self):
        assert self.tf._format_value(0.00001) == "0.000010"

    def test_format_value_float_normal(self):
        assert self.tf._format_value(3.14159) == "3.1416"

    def test_format_value_with_spec(self):
        assert self.tf._format_value(3.14159, ".2f") == "3.14"

    def test_format_value_int_thousands(self):
        assert self.tf._format_value(5000) == "5,000"

    def test_format_value_none(self):
        assert self.tf._format_value(None) == "-"

    def test_format_value_bool(self):
        assert self.tf._format_value(True) == "True"


# ---------------------------------------------------------------------------
# ResultFormatter
# ---------------------------------------------------------------------------
class TestResultFormatter:
    def test_unknown_analysis(self):
        with pytest.raises(ValueError, match="Unknown analysis"):
            _ResultFormatter().format("posthoc", {})

    def test_power(self):
        scenarios = [Scenario("Small & Accurate", 500, 0.95), Scenario("Large & Error-Prone", 5000, 0.6)]
        powers = {
            "Small & Accurate": {"sample_size": 500, "power": 99.99},
            "Large & Error-Prone": {"sample_size": 5000, "power": 100.0},
        }
        result = build_power_result(scenarios, 0.2, 0.05, "two-sided", "observed", EFFECT, powers)
        text = _format_results("power", result)

        assert "Cohen's h" in text
        assert "-0.4402" in text
        assert "observed" in text
        assert "Small & Accurate" in text
        assert "5,000" in text
        assert "100.00" in text

    def test_sample_size(self):
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, EFFECT, 40.51)
        text = _format_results("sample_size", result)

        assert "Required sample size: 41" in text
        assert "40.51" in text
        assert "Target power: 80.0%" in text

    def test_sample_size_zero_effect(self):
        effect = {"p1": 0.2, "p2": 0.2, "effect_size": 0.0}
        result = build_sample_size_result(0.2, 0.05, "two-sided", "true", 80.0, effect, None)
        assert "Effect size is zero" in _format_results("sample_size", result)

    def test_simulation(self):
        scenario = Scenario("noisy", 400, 0.6)
        summaries = {
            "noisy": {
                "n_iterations": 1000,
                "mean": 0.4401,
                "std": 0.0248,
                "bias": 0.2401,
                "rmse": 0.2414,
                "lower": 0.3925,
                "upper": 0.49,
                "expected_mean": 0.44,
            }
        }
        result = build_simulation_result([scenario], 0.2, 1000, 2137, {"summaries": summaries})
        text = _format_results("simulation", result)

        assert "True utilization rate: 0.20" in text
        assert "Iterations per scenario: 1,000" in text
        assert "+0.2401" in text
        assert "[0.3925, 0.4900]" in text
        assert "0.60" in text
