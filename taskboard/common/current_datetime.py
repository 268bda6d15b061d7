from datetime import datetime, timezone


def get_current_datetime() -> datetime:
    return datetime.now(timezone.utc)


def get_start_of_today() -> datetime:
    return get_current_datetime().replace(hour=0, minute=0, second=0, microsecond=0)
