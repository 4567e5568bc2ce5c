"""
Tests for the status ledger
"""

import json
import pytest

from daily_cheer.errors import LedgerError
from daily_cheer.models import StatusLedger, HISTORY_LIMIT
from daily_cheer.storage.ledger import LedgerStore, record_upload


def test_first_run_defaults(tmp_path):
    """測試檔案不存在時回傳預設 ledger"""
    ledger = LedgerStore(str(tmp_path / "status.json")).load()

    assert ledger.videos == {"morning": None, "night": None, "summary": None}
    assert ledger.history == []
    assert ledger.last_updated is None


def test_record_upload_overwrites_slot():
    """測試 videos[slot] 永遠是最新一次上傳"""
    ledger = StatusLedger()
    record_upload(ledger, "morning", "v1", "2026-10-18", "2026-10-18T06:00:00+09:00", "t1")
    record_upload(ledger, "morning", "v2", "2026-10-19", "2026-10-19T06:00:00+09:00", "t2")

    assert ledger.videos["morning"].video_id == "v2"
    assert ledger.videos["night"] is None
    assert [h.video_id for h in ledger.history] == ["v2", "v1"]
    assert ledger.last_updated == "2026-10-19T06:00:00+09:00"


def test_history_bound():
    """測試 150 次上傳後 history 只保留最新 100 筆"""
    ledger = StatusLedger()
    for i in range(150):
        record_upload(ledger, "summary", f"v{i}", "2026-10-19", f"t{i}")

    assert len(ledger.history) == HISTORY_LIMIT
    assert ledger.history[0].video_id == "v149"
    assert ledger.history[-1].video_id == "v50"


def test_unknown_slot():
    """測試不合法的 slot"""
    with pytest.raises(ValueError):
        record_upload(StatusLedger(), "noon", "v1", "2026-10-19", "t")


def test_save_and_load(tmp_path):
    """測試整份寫入後可讀回 (camelCase JSON)"""
    path = tmp_path / "nested" / "status.json"
    store = LedgerStore(str(path))

    ledger = store.load()
    record_upload(ledger, "night", "n1", "2026-10-19", "2026-10-19T21:00:00+09:00", "おつかれさま")
    store.save(ledger)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["lastUpdated"] == "2026-10-19T21:00:00+09:00"
    assert raw["videos"]["night"]["videoId"] == "n1"
    assert raw["videos"]["morning"] is None
    assert raw["history"][0]["type"] == "night"

    reloaded = store.load()
    assert reloaded.videos["night"].video_id == "n1"
    assert reloaded.history[0].title == "おつかれさま"
    assert store.latest_record("night").video_id == "n1"
    assert store.latest_record("morning") is None


def test_corrupt_ledger(tmp_path):
    """測試存在但無法解析的 ledger 是致命錯誤"""
    path = tmp_path / "status.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LedgerError):
        LedgerStore(str(path)).load()
