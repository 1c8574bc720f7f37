from datetime import datetime, timezone

from bloom.db import Base, UTCDateTime

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

__all__ = ["Base", "UTCDateTime", "utcnow"]
