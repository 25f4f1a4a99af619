from metric_pulse.utils.patterns import hour_to_slot
from metric_pulse.utils.periods import anchor_for, previous, resolve

__all__ = ["anchor_for", "hour_to_slot", "previous", "resolve"]
