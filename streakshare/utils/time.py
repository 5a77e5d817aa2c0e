from datetime import datetime
import pytz

UTC = pytz.UTC


def now_utc() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(UTC)


def iso_timestamp(moment: datetime = None) -> str:
    """Second-precision ISO-8601 UTC string, e.g. 2025-03-01T12:00:00Z."""
    moment = moment or now_utc()
    if moment.tzinfo is None:
        moment = UTC.localize(moment)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
