"""
Comment merge logic

朝 (目標) 與 夜 (達成) 兩支影片的留言，以 author_id 合併為每位使用者一筆:
1. 朝留言依序寫入 (同一作者多則時，後面的覆蓋前面的)
2. 夜留言補上 night_achievement，已存在的使用者若夜留言有頭像則以夜為準
3. 兩邊都有留言的使用者排在前面 (stable sort)

author_id 為空白的留言不可共用 key，每一則各自成為一筆。
"""

from typing import List, Dict, Optional
import logging

from daily_cheer.models import CanonicalComment, AggregateUserEntry, MergeStats, OutputDataset
from daily_cheer.utils.hashing import color_for

logger = logging.getLogger(__name__)


def _merge_key(comment: CanonicalComment, position: str) -> str:
    """
    合併用 key

    空白 author_id 以留言位置產生唯一的內部 key (不會與真實 channel ID 衝突)。
    """
    if comment.author_id.strip():
        return f"id:{comment.author_id}"
    return f"anon:{position}"


def _new_entry(comment: CanonicalComment, morning_goal: Optional[str],
               night_achievement: Optional[str]) -> AggregateUserEntry:
    return AggregateUserEntry(
        username=comment.author_name,
        user_id=comment.author_id,
        morning_goal=morning_goal,
        night_achievement=night_achievement,
        avatar_color=color_for(comment.author_id),
        avatar_url=comment.avatar_url or None,
    )


def merge_comments(
    morning: List[CanonicalComment],
    night: List[CanonicalComment]
) -> List[AggregateUserEntry]:
    """
    合併朝/夜留言

    Args:
        morning: 朝影片的留言 (抓取順序)
        night: 夜影片的留言 (抓取順序)

    Returns:
        AggregateUserEntry 清單，兩邊都有留言的使用者在前
    """
    user_map: Dict[str, AggregateUserEntry] = {}
    overwritten = 0

    for i, comment in enumerate(morning):
        key = _merge_key(comment, f"morning:{i}")
        if key in user_map:
            overwritten += 1
        # dict 覆寫既有 key 時保留原本的插入位置
        user_map[key] = _new_entry(comment, comment.text, None)

    for i, comment in enumerate(night):
        key = _merge_key(comment, f"night:{i}")
        existing = user_map.get(key)
        if existing is None:
            user_map[key] = _new_entry(comment, None, comment.text)
            continue

        update = {"night_achievement": comment.text}
        if comment.avatar_url:
            update["avatar_url"] = comment.avatar_url
        user_map[key] = existing.model_copy(update=update)

    if overwritten:
        logger.info(f"Morning comments overwritten by a later comment from the same author: {overwritten}")

    entries = list(user_map.values())
    # sorted() 是 stable sort
    entries = sorted(entries, key=lambda e: 0 if e.has_both else 1)

    logger.info(f"Merged {len(morning)} morning + {len(night)} night comments -> {len(entries)} users")
    return entries


def compute_stats(entries: List[AggregateUserEntry]) -> MergeStats:
    """
    計算合併統計

    Args:
        entries: merge_comments 的輸出

    Returns:
        MergeStats
    """
    both = sum(1 for e in entries if e.has_both)
    morning_only = sum(1 for e in entries if e.morning_goal and not e.night_achievement)
    night_only = sum(1 for e in entries if not e.morning_goal and e.night_achievement)

    return MergeStats(
        total_users=len(entries),
        both_commented=both,
        morning_only=morning_only,
        night_only=night_only,
    )


def build_dataset(
    date: str,
    morning_video_id: str,
    night_video_id: str,
    entries: List[AggregateUserEntry]
) -> OutputDataset:
    """組成每日輸出 dataset"""
    return OutputDataset(
        date=date,
        morning_video_id=morning_video_id,
        night_video_id=night_video_id,
        comments=entries,
        stats=compute_stats(entries),
    )
