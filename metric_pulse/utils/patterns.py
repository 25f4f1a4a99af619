from typing import Optional

# (key, label, start_hour, end_hour). The last slot wraps past midnight.
_TIME_SLOTS = [
    ("early_morning", "Early morning (06-09)", 6, 9),
    ("morning", "Morning (09-12)", 9, 12),
    ("afternoon", "Afternoon (12-15)", 12, 15),
    ("evening", "Evening (15-18)", 15, 18),
    ("night", "Night (18-21)", 18, 21),
    ("late_night", "Late night (21-06)", 21, 6),
]


def time_slots() -> list[tuple[str, str, int, int]]:
    return list(_TIME_SLOTS)


def hour_in_slot(hour: int, start: int, end: int) -> bool:
    if start < end:
        return start <= hour < end
    return hour >= start or hour < end


def hour_to_slot(hour: Optional[int]) -> Optional[str]:
    """Map an hour of day to its slot key; None stays unbucketed."""
    if hour is None:
        return None
    for key, _label, start, end in _TIME_SLOTS:
        if hour_in_slot(hour, start, end):
            return key
    return None
