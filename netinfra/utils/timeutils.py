from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column is declared timezone-naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
