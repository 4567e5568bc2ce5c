"""
Status ledger storage

記錄每個 slot (morning/night/summary) 最新的 video id 與上傳歷史。
單一寫入者假設：上傳由外部 scheduler 依序執行，不做 locking。
"""

import json
from typing import Optional
from pathlib import Path
import logging

from pydantic import ValidationError

from daily_cheer.errors import LedgerError
from daily_cheer.models import StatusLedger, VideoSlotRecord, HistoryEntry, SLOTS, HISTORY_LIMIT
from daily_cheer.storage.file_store import write_json_atomic
from daily_cheer.utils.time import jst_isoformat

logger = logging.getLogger(__name__)


def record_upload(
    ledger: StatusLedger,
    slot: str,
    video_id: str,
    date: str,
    uploaded_at: str,
    title: str = ""
) -> StatusLedger:
    """
    記錄一次上傳 (唯一的變更途徑)

    覆寫 videos[slot]，history 開頭插入一筆並截斷為 HISTORY_LIMIT 筆，更新 last_updated。

    Args:
        ledger: 記憶體中的 ledger (會被修改)
        slot: morning | night | summary
        video_id: 上傳後的影片 ID
        date: JST 日期
        uploaded_at: 上傳時間 (ISO8601)
        title: 影片標題

    Returns:
        同一個 ledger 物件
    """
    if slot not in SLOTS:
        raise ValueError(f"Unknown slot: {slot}")

    ledger.videos[slot] = VideoSlotRecord(video_id=video_id, date=date, uploaded_at=uploaded_at)
    ledger.history.insert(0, HistoryEntry(
        type=slot,
        video_id=video_id,
        date=date,
        uploaded_at=uploaded_at,
        title=title,
    ))
    del ledger.history[HISTORY_LIMIT:]
    ledger.last_updated = uploaded_at
    return ledger


class LedgerStore:
    """JSON 檔案形式的 status ledger"""

    def __init__(self, path: str = "output/status.json"):
        self.path = Path(path)

    def load(self) -> StatusLedger:
        """
        讀取 ledger

        檔案不存在時回傳預設值 (首次執行)；存在但無法解析時拋出 LedgerError。
        """
        if not self.path.exists():
            logger.info(f"No ledger at {self.path}, starting with an empty one")
            return StatusLedger()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            ledger = StatusLedger(**data)
        except (OSError, ValueError, TypeError, ValidationError) as e:
            raise LedgerError(f"Ledger at {self.path} is unreadable: {e}") from e

        for slot in SLOTS:
            ledger.videos.setdefault(slot, None)
        return ledger

    def save(self, ledger: StatusLedger) -> None:
        """整份覆寫 ledger"""
        if ledger.last_updated is None:
            ledger.last_updated = jst_isoformat()
        write_json_atomic(self.path, ledger.model_dump(by_alias=True))
        logger.info(f"Written ledger: {self.path} ({len(ledger.history)} history entries)")

    def latest_record(self, slot: str) -> Optional[VideoSlotRecord]:
        """取得 slot 最新一次上傳的紀錄 (沒有則 None)"""
        return self.load().videos.get(slot)
