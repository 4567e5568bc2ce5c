"""
Remotion renderer driver

Renderer 本身 (scene templates) 不在此 package；這裡只負責組 input props、
寫出 props 檔並呼叫 Remotion CLI。
"""

import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from daily_cheer.config import RenderConfig
from daily_cheer.errors import RenderError
from daily_cheer.models import AggregateUserEntry
from daily_cheer.processing.timeline import summary_duration, short_duration
from daily_cheer.storage.file_store import write_json_atomic
from daily_cheer.utils.hashing import bgm_for, praise_for

logger = logging.getLogger(__name__)


def build_props(
    slot: str,
    date: str,
    fps: int,
    comments: Optional[List[AggregateUserEntry]] = None
) -> Dict[str, Any]:
    """
    組成 renderer input props

    summary 需要 comments；durationInFrames 必須在 render 前以實際人數決定。

    Args:
        slot: morning | night | summary
        date: JST 日期
        fps: frames per second
        comments: merge 後的使用者 (summary 用)

    Returns:
        props dict
    """
    props: Dict[str, Any] = {
        "date": date,
        "bgm": bgm_for(slot, date),
    }

    if slot == "summary":
        comments = comments or []
        props["comments"] = [
            dict(c.model_dump(by_alias=True, exclude_none=True), praise=praise_for(c.user_id))
            for c in comments
        ]
        props["durationInFrames"] = summary_duration(len(comments), fps)
    else:
        props["durationInFrames"] = short_duration(fps)

    return props


def build_command(cfg: RenderConfig, slot: str, props_path: Path, output_path: Path) -> List[str]:
    """Remotion CLI 指令"""
    composition = cfg.compositions.get(slot)
    if not composition:
        raise RenderError(f"No composition configured for {slot}")

    return list(cfg.command) + [
        cfg.entry_point,
        composition,
        str(output_path.resolve()),
        f"--props={props_path.resolve()}",
        f"--codec={cfg.codec}",
        f"--gl={cfg.gl}",
    ]


def _discard(*paths: Path) -> None:
    """render 失敗時移除 props 檔與不完整的影片"""
    for path in paths:
        if path.exists():
            path.unlink()
            logger.info(f"Removed {path}")


def render_video(cfg: RenderConfig, slot: str, props: Dict[str, Any],
                 props_path: Path, output_path: Path) -> Path:
    """
    執行 render

    失敗時 props 檔與輸出檔都會被刪除，不會留下不完整的影片。

    Args:
        cfg: Render 設定
        slot: morning | night | summary
        props: build_props 的輸出
        props_path: props JSON 寫入路徑
        output_path: 影片輸出路徑

    Returns:
        output_path
    """
    cmd = build_command(cfg, slot, props_path, output_path)
    write_json_atomic(props_path, props)

    logger.info(f"Rendering {slot} ({props['durationInFrames']} frames): {' '.join(cmd)}")
    try:
        proc = subprocess.run(cmd, cwd=cfg.project_dir, capture_output=True, text=True)
    except OSError as e:
        _discard(props_path, output_path)
        raise RenderError(f"Failed to start renderer: {e}") from e

    if proc.returncode != 0:
        logger.error(f"Renderer stderr:\n{proc.stderr}")
        _discard(props_path, output_path)
        raise RenderError(f"Renderer exited with code {proc.returncode}")

    if not output_path.exists():
        _discard(props_path)
        raise RenderError(f"Renderer finished but {output_path} was not created")

    logger.info(f"✓ Rendered: {output_path}")
    return output_path
