from datetime import datetime, UTC


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the naive DateTime columns"""
    return datetime.now(UTC).replace(tzinfo=None)


def from_timestamp(seconds: int) -> datetime:
    """Naive UTC datetime for a POSIX timestamp"""
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)
