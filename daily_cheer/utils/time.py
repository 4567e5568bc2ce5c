"""Time utilities: the pipeline's civil day is always UTC+9, regardless of host timezone."""

from datetime import datetime, timezone
from typing import Optional
import pytz


# 固定 +09:00 offset (不使用 Asia/Tokyo，避免依賴 tz database)
JST = pytz.FixedOffset(9 * 60)


def utcnow() -> datetime:
    """取得當前 UTC 時間 (tz-aware)"""
    return datetime.now(timezone.utc)


def to_jst(dt: datetime) -> datetime:
    """
    轉換時間為 +09:00 tz-aware datetime

    Args:
        dt: 輸入時間 (naive 視為 UTC)

    Returns:
        +09:00 tz-aware datetime
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(JST)


def jst_date(now: Optional[datetime] = None) -> str:
    """
    取得 +09:00 的日期 (YYYY-MM-DD)

    Args:
        now: 指定時間 (測試用)，預設為現在

    Returns:
        YYYY-MM-DD
    """
    return to_jst(now or utcnow()).strftime("%Y-%m-%d")


def jst_isoformat(now: Optional[datetime] = None) -> str:
    """取得 +09:00 的 ISO8601 時間字串 (秒精度)"""
    return to_jst(now or utcnow()).isoformat(timespec="seconds")


def format_japanese_date(date_str: str) -> str:
    """
    YYYY-MM-DD → YYYY年M月D日 (影片標題用)

    Args:
        date_str: YYYY-MM-DD

    Returns:
        例如 2026年10月19日
    """
    d = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{d.year}年{d.month}月{d.day}日"
