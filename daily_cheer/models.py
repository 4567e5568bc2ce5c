"""
Core data models for Daily Cheer

CanonicalComment 是抓取層的輸出，AggregateUserEntry / OutputDataset 是 renderer 的輸入契約，
StatusLedger 是跨執行的狀態文件。JSON 欄位一律使用 camelCase (renderer 端的命名)。
"""

from typing import Optional, List, Dict, Literal
from pydantic import BaseModel, Field


Slot = Literal["morning", "night", "summary"]
SLOTS = ("morning", "night", "summary")

HISTORY_LIMIT = 100


class CanonicalComment(BaseModel):
    """
    單一留言 (平台回傳格式正規化後)

    author_id 在平台未提供時為空字串，不會是 None。
    """
    comment_id: str = Field(..., description="平台留言 ID")
    author_id: str = Field(default="", description="作者 channel ID (未提供時為空字串)")
    author_name: str = Field(default="", description="顯示名稱 (不保證唯一)")
    text: str = Field(default="", description="留言內容 (未過濾)")
    published_at: str = Field(default="", description="平台提供的發布時間")
    avatar_url: Optional[str] = Field(None, description="頭像 URL")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "comment_id": "UgzX1abc",
                "author_id": "UC1234567890",
                "author_name": "たかし",
                "text": "今日は仕事のプレゼン資料を完成させる！",
                "published_at": "2026-10-19T07:12:00Z",
                "avatar_url": "https://yt3.ggpht.com/abc"
            }
        }


class AggregateUserEntry(BaseModel):
    """
    合併後的每位使用者一筆 (朝 + 夜)

    morning_goal / night_achievement 至少一個有值。
    """
    username: str
    user_id: str = Field(..., alias="userId")
    morning_goal: Optional[str] = Field(None, alias="morningGoal")
    night_achievement: Optional[str] = Field(None, alias="nightAchievement")
    avatar_color: str = Field(..., alias="avatarColor")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "username": "さくら",
                "userId": "UC1234567890",
                "morningGoal": "30分ランニングする",
                "nightAchievement": "40分走れた！自己ベスト更新💪",
                "avatarColor": "#4ECDC4",
                "avatarUrl": "https://yt3.ggpht.com/abc"
            }
        }

    @property
    def has_both(self) -> bool:
        return bool(self.morning_goal) and bool(self.night_achievement)


class MergeStats(BaseModel):
    """合併統計 (冗餘資訊，方便 renderer 與 log 使用)"""
    total_users: int = Field(..., alias="totalUsers")
    both_commented: int = Field(..., alias="bothCommented")
    morning_only: int = Field(..., alias="morningOnly")
    night_only: int = Field(..., alias="nightOnly")

    class Config:
        populate_by_name = True


class OutputDataset(BaseModel):
    """每日輸出檔 comments_<date>.json"""
    date: str = Field(..., description="JST 日期 YYYY-MM-DD")
    morning_video_id: str = Field(..., alias="morningVideoId")
    night_video_id: str = Field(..., alias="nightVideoId")
    comments: List[AggregateUserEntry] = Field(default_factory=list)
    stats: MergeStats

    class Config:
        populate_by_name = True


class VideoSlotRecord(BaseModel):
    """某個 slot 最新一次上傳"""
    video_id: str = Field(..., alias="videoId")
    date: str
    uploaded_at: str = Field(..., alias="uploadedAt")

    class Config:
        populate_by_name = True


class HistoryEntry(BaseModel):
    """上傳歷史 (一次上傳一筆)"""
    type: Slot
    video_id: str = Field(..., alias="videoId")
    date: str
    uploaded_at: str = Field(..., alias="uploadedAt")
    title: str = ""

    class Config:
        populate_by_name = True


def _empty_videos() -> Dict[str, Optional[VideoSlotRecord]]:
    return {slot: None for slot in SLOTS}


class StatusLedger(BaseModel):
    """
    跨執行的狀態文件 (每個部署一份)

    videos[slot] 永遠是該 slot 最新的上傳；history 由新到舊，最多 HISTORY_LIMIT 筆。
    """
    last_updated: Optional[str] = Field(None, alias="lastUpdated")
    videos: Dict[str, Optional[VideoSlotRecord]] = Field(default_factory=_empty_videos)
    history: List[HistoryEntry] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "lastUpdated": "2026-10-19T21:05:00+09:00",
                "videos": {
                    "morning": {"videoId": "abc123", "date": "2026-10-19",
                                "uploadedAt": "2026-10-19T06:00:00+09:00"},
                    "night": None,
                    "summary": None
                },
                "history": [
                    {"type": "morning", "videoId": "abc123", "date": "2026-10-19",
                     "uploadedAt": "2026-10-19T06:00:00+09:00",
                     "title": "【2026年10月19日】おはよう！今日の目標は？🌅"}
                ]
            }
        }
