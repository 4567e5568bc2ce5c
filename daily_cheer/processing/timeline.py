"""
Timeline calculator

Summary video 的長度由參與人數決定。Renderer 無法在 render 途中改變總長度，
必須以 merge 後的實際人數事先計算。
"""

from typing import Dict


INTRO_SECONDS = 4
PER_USER_SECONDS = 6
LIST_VIEW_SECONDS = 5
OUTRO_SECONDS = 4

SHORT_VIDEO_SECONDS = 15
DEFAULT_FPS = 30


def _check(user_count: int, fps: int) -> None:
    if user_count < 0:
        raise ValueError(f"user_count must be >= 0, got {user_count}")
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")


def summary_duration(user_count: int, fps: int = DEFAULT_FPS) -> int:
    """
    Summary video 總 frame 數

    intro + user_count * per_user + list_view + outro (各秒數 × fps)

    Args:
        user_count: merge 後的使用者數
        fps: frames per second

    Returns:
        duration in frames
    """
    _check(user_count, fps)
    seconds = INTRO_SECONDS + user_count * PER_USER_SECONDS + LIST_VIEW_SECONDS + OUTRO_SECONDS
    return seconds * fps


def section_starts(user_count: int, fps: int = DEFAULT_FPS) -> Dict[str, int]:
    """
    各區段的開始 frame (preview 用)

    Returns:
        {'intro', 'users', 'list_view', 'outro', 'end'} -> frame
    """
    _check(user_count, fps)
    users_start = INTRO_SECONDS * fps
    list_start = users_start + user_count * PER_USER_SECONDS * fps
    outro_start = list_start + LIST_VIEW_SECONDS * fps
    return {
        'intro': 0,
        'users': users_start,
        'list_view': list_start,
        'outro': outro_start,
        'end': outro_start + OUTRO_SECONDS * fps,
    }


def short_duration(fps: int = DEFAULT_FPS) -> int:
    """早上/晚上 short video (固定 15 秒)"""
    _check(0, fps)
    return SHORT_VIDEO_SECONDS * fps
