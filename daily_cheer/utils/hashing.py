"""Deterministic hashing utilities for per-user and per-day visual attributes."""

from typing import List, Sequence


AVATAR_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96E6A1", "#DDA0DD",
    "#F7DC6F", "#BB8FCE", "#85C1E9", "#F8B500", "#58D68D",
    "#EC7063", "#5DADE2", "#AF7AC5", "#48C9B0", "#F4D03F",
]

PRAISE_MESSAGES = [
    "すごい！",
    "えらい！",
    "さすが！",
    "最高！",
    "完璧！",
    "天才！",
    "素晴らしい！",
    "やったね！",
    "お見事！",
    "グッジョブ！",
    "ナイス！",
    "神！",
    "がんばった！",
    "カッコいい！",
    "輝いてる！",
]

POP_BGM_FILES = [
    "SUMMER_TRIANGLE.mp3",
    "さみしいおばけと東京の月.mp3",
    "サンタは中央線でやってくる.mp3",
    "ステラと塔の物語.mp3",
    "ヒダマリトロニカ.mp3",
]

CHILL_BGM_FILES = [
    "カエルの勇者.mp3",
    "ローファイ少女は今日も寝不足.mp3",
    "宇宙飛行士が最後に見たもの.mp3",
    "神隠しの真相.mp3",
    "週末京都現実逃避.mp3",
]


def _to_int32(value: int) -> int:
    """截斷為 32-bit signed integer"""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _utf16_units(text: str) -> List[int]:
    """字串的 UTF-16 code units (與 renderer 端 charCodeAt 一致)"""
    data = text.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def identity_hash(user_id: str) -> int:
    """
    使用者 ID 的字串 hash

    hash = code + ((hash << 5) - hash)；只有位移是 32-bit 截斷，
    累加值本身不截斷，以維持與既有頭像顏色完全相同的分配。

    Args:
        user_id: channel ID (可為空字串)

    Returns:
        hash 值 (可能超出 32-bit 範圍)
    """
    h = 0
    for code in _utf16_units(user_id):
        h = code + (_to_int32(_to_int32(h) << 5) - h)
    return h


def seed_hash(seed: str) -> int:
    """
    日期 seed 的字串 hash (每一步都截斷為 32-bit)

    Args:
        seed: 通常為 YYYY-MM-DD

    Returns:
        32-bit signed hash
    """
    h = 0
    for code in _utf16_units(seed):
        h = _to_int32(_to_int32(h << 5) - h + code)
    return h


def _pick(options: Sequence[str], h: int) -> str:
    return options[abs(h) % len(options)]


def color_for(user_id: str) -> str:
    """使用者 ID → 頭像顏色 (空字串固定為 palette[0])"""
    return _pick(AVATAR_COLORS, identity_hash(user_id))


def praise_for(user_id: str) -> str:
    """使用者 ID → 稱讚語 (同一使用者永遠相同)"""
    return _pick(PRAISE_MESSAGES, identity_hash(user_id))


def seeded_index(seed: str, length: int) -> int:
    """
    由 seed 決定的 index，同一 seed 在不同 process 也會選到相同項目

    Args:
        seed: seed 字串
        length: 候選數量 (> 0)

    Returns:
        0 <= index < length
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    return abs(seed_hash(seed)) % length


def morning_bgm(date: str) -> str:
    """早上影片用 BGM (pop)"""
    return f"sounds/bgm/pop/{POP_BGM_FILES[seeded_index(date, len(POP_BGM_FILES))]}"


def night_bgm(date: str) -> str:
    """晚上影片與 summary 影片用 BGM (chill)"""
    return f"sounds/bgm/chill/{CHILL_BGM_FILES[seeded_index(date, len(CHILL_BGM_FILES))]}"


def bgm_for(slot: str, date: str) -> str:
    """slot 對應的 BGM 路徑"""
    if slot == "morning":
        return morning_bgm(date)
    return night_bgm(date)
