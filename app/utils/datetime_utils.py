"""时间工具：统一使用带时区的 UTC 时间。"""
import math
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """SQLite 读回的是 naive datetime，按 UTC 补上时区。"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def seconds_until(moment: datetime, now: datetime | None = None) -> int:
    """距 moment 的剩余整秒数，向下取整，已过期返回 0。"""
    now = now or utcnow()
    return max(0, math.floor((ensure_utc(moment) - ensure_utc(now)).total_seconds()))
