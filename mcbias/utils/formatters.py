"""
Plain-text result formatting for MCBias.

Renders the result dictionaries built in ``mcbias.core.results`` as
fixed-width tables for console output.
"""

from typing import Any, Dict, List, Optional

__all__ = []


class _TableFormatter:
    """Fixed-width table rendering helpers."""

    def _format_value(self, value: Any, spec: Optional[str] = None) -> str:
        if value is None:
            return "-"
        if spec is not None:
            return format(value, spec)
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, int):
            return f"{value:,}"
        if isinstance(value, float):
            if value != 0 and abs(value) < 0.001:
                return f"{value:.6f}"
            return f"{value:.4f}"
        return str(value)

    def _create_table(
        self,
        headers: List[str],
        rows: List[List[str]],
        col_widths: Optional[List[int]] = None,
    ) -> str:
        if col_widths is None:
            col_widths = [max([len(str(h))] + [len(str(r[i])) for r in rows]) for i, h in enumerate(headers)]

        def line(cells):
            return " ".join(str(c).ljust(w) for c, w in zip(cells, col_widths)).rstrip()

        out = [line(headers), " ".join("-" * w for w in col_widths)]
        out.extend(line(row) for row in rows)
        return "\n".join(out)


class _ResultFormatter(_TableFormatter):
    """Formats the three analysis result types."""

    def format(self, analysis: str, result: Dict[str, Any]) -> str:
        if analysis == "simulation":
            return self._format_simulation(result)
        if analysis == "power":
            return self._format_power(result)
        if analysis == "sample_size":
            return self._format_sample_size(result)
        raise ValueError(f"Unknown analysis type: {analysis}")

    def _format_effect(self, model: Dict[str, Any], effect: Dict[str, Any]) -> str:
        return (
            f"Reference proportion (p1, {model['reference']}): {self._format_value(effect['p1'])}\n"
            f"Comparison proportion (p2): {self._format_value(effect['p2'])}\n"
            f"Effect size (Cohen's h): {self._format_value(effect['effect_size'])}"
        )

    def _format_simulation(self, result: Dict[str, Any]) -> str:
        model = result["model"]
        summaries = result["results"]["summaries"]
        scenarios = {s["name"]: s for s in model["scenarios"]}

        headers = ["Scenario", "N", "Accuracy", "Mean", "Expected", "SD", "Bias", "RMSE", "95% interval"]
        rows = []
        for name, summary in summaries.items():
            scenario = scenarios[name]
            rows.append(
                [
                    name,
                    self._format_value(scenario["sample_size"]),
                    self._format_value(scenario["accuracy"], ".2f"),
                    self._format_value(summary["mean"]),
                    self._format_value(summary["expected_mean"]),
                    self._format_value(summary["std"]),
                    self._format_value(summary["bias"], "+.4f"),
                    self._format_value(summary["rmse"]),
                    f"[{summary['lower']:.4f}, {summary['upper']:.4f}]",
                ]
            )

        header = (
            f"True utilization rate: {model['true_utilization']:.2f}\n"
            f"Iterations per scenario: {model['n_iterations']:,}\n"
        )
        return header + "\n" + self._create_table(headers, rows)

    def _format_power(self, result: Dict[str, Any]) -> str:
        model = result["model"]
        results = result["results"]

        headers = ["Scenario", "Sample size", "Power (%)"]
        rows = [
            [name, self._format_value(entry["sample_size"]), f"{entry['power']:.2f}"]
            for name, entry in results["powers"].items()
        ]
        return (
            self._format_effect(model, results["effect"])
            + f"\nAlpha: {model['alpha']} ({model['alternative']})\n\n"
            + self._create_table(headers, rows)
        )

    def _format_sample_size(self, result: Dict[str, Any]) -> str:
        model = result["model"]
        results = result["results"]
        if results["required_sample_size"] is None:
            verdict = "Effect size is zero: no sample size reaches the target power."
        else:
            verdict = f"Required sample size: {results['required_sample_size']:,} (exact root {results['required_n']:.2f})"
        return (
            self._format_effect(model, results["effect"])
            + f"\nAlpha: {model['alpha']} ({model['alternative']})"
            + f"\nTarget power: {model['target_power']:.1f}%\n\n"
            + verdict
        )


def _format_results(analysis: str, result: Dict[str, Any]) -> str:
    """Format a result dict (``"simulation"``, ``"power"`` or ``"sample_size"``)."""
    return _ResultFormatter().format(analysis, result)
