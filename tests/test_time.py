"""
Tests for the fixed UTC+9 civil day
"""

from datetime import datetime, timezone, timedelta

from daily_cheer.utils.time import jst_date, jst_isoformat, format_japanese_date


def test_day_boundary():
    """測試日期以 +09:00 切換"""
    assert jst_date(datetime(2026, 10, 19, 14, 59, tzinfo=timezone.utc)) == "2026-10-19"
    assert jst_date(datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)) == "2026-10-20"


def test_host_timezone_independent():
    """測試相同時間點不論輸入時區都得到相同日期"""
    instant = datetime(2026, 12, 31, 16, 30, tzinfo=timezone.utc)
    pacific = instant.astimezone(timezone(timedelta(hours=-8)))

    assert jst_date(instant) == jst_date(pacific) == "2027-01-01"


def test_naive_is_utc():
    assert jst_date(datetime(2026, 10, 19, 20, 0)) == "2026-10-20"


def test_isoformat():
    assert jst_isoformat(datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)) == "2026-10-20T00:30:00+09:00"


def test_japanese_date():
    assert format_japanese_date("2026-01-05") == "2026年1月5日"
    assert format_japanese_date("2026-10-19") == "2026年10月19日"
