"""Caller-facing error kinds raised by the report and simulation engine."""


class MetricPulseError(ValueError):
    """Base class; ``code`` is a stable identifier for the API layer."""

    code = "metric_pulse_error"


class InvalidPeriodAnchor(MetricPulseError):
    code = "invalid_period_anchor"


class InvalidSimulationInput(MetricPulseError):
    code = "invalid_simulation_input"


class UnsupportedCategory(MetricPulseError):
    code = "unsupported_category"
