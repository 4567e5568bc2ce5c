"""
File-based storage for per-day artifacts

每日 dataset (comments_<date>.json) 與影片檔 (<slot>_<date>.mp4) 都放在 output_dir。
JSON 以暫存檔寫入後 rename，失敗時不會留下半份檔案。
"""

import os
import json
import tempfile
from typing import Any, Dict, Optional
from pathlib import Path
import logging

from daily_cheer.models import OutputDataset

logger = logging.getLogger(__name__)


def write_json_atomic(file_path: Path, data: Dict[str, Any]) -> None:
    """整份寫入 JSON (暫存檔 + os.replace)"""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(file_path.parent), prefix=f".{file_path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class FileStore:
    """每日輸出檔案儲存"""

    def __init__(self, base_dir: str = "output"):
        """
        初始化 FileStore

        Args:
            base_dir: 輸出目錄
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"FileStore initialized at {self.base_dir}")

    def dataset_path(self, date: str) -> Path:
        return self.base_dir / f"comments_{date}.json"

    def video_path(self, slot: str, date: str) -> Path:
        return self.base_dir / f"{slot}_{date}.mp4"

    def props_path(self, slot: str, date: str) -> Path:
        return self.base_dir / f"props_{slot}_{date}.json"

    def save_dataset(self, dataset: OutputDataset) -> Path:
        """寫入每日 dataset (同日期重跑會覆蓋)"""
        file_path = self.dataset_path(dataset.date)
        write_json_atomic(file_path, dataset.model_dump(by_alias=True, exclude_none=True))
        logger.info(f"Written dataset ({len(dataset.comments)} users): {file_path}")
        return file_path

    def read_dataset(self, date: str) -> Optional[OutputDataset]:
        """讀取每日 dataset (不存在時回傳 None)"""
        file_path = self.dataset_path(date)

        if not file_path.exists():
            return None

        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return OutputDataset(**data)
