import time
from datetime import datetime, timezone as dt_tz

UNSCHEDULED = 0  # sentinel next_review_date: no scheduled time, due now

def now_ms():
    return int(time.time() * 1000)

def ms_to_utc(ms):
    return datetime.fromtimestamp(ms / 1000, tz=dt_tz.utc)

def to_utc_iso(ms):
    """ISO-8601 for an epoch-ms value; None for the unscheduled sentinel."""
    if ms == UNSCHEDULED:
        return None
    return ms_to_utc(ms).isoformat()
