from metric_pulse.report import compute_period_report, simulate_growth

__all__ = ["compute_period_report", "simulate_growth"]
