"""
YouTube uploader

影片上傳失敗是致命錯誤 (UploadError)；上傳後的引導留言是 best-effort，失敗只記 log。
"""

from typing import Any, Dict, Optional
import logging

import httplib2
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from daily_cheer.errors import UploadError
from daily_cheer.utils.time import format_japanese_date

logger = logging.getLogger(__name__)


CATEGORY_PEOPLE_AND_BLOGS = "22"

VIDEO_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "morning": {
        "title": "【{date}】おはよう！今日の目標は？🌅",
        "description": (
            "今日も一日頑張ろう！\n\n"
            "あなたの今日の目標をコメントで教えてください✨\n\n"
            "小さな目標でもOK！\n"
            "みんなで共有して、一緒に頑張りましょう！\n\n"
            "#今日の頑張り #毎日投稿 #モチベーション"
        ),
        "tags": ["今日の頑張り", "モチベーション", "目標", "毎日投稿", "頑張る"],
        "prompt_comment": "今日の目標をこのコメントへの返信ではなく、新しいコメントで教えてね！🌅",
    },
    "night": {
        "title": "【{date}】おつかれさま！今日できたことは？🌙",
        "description": (
            "今日も一日お疲れ様でした！\n\n"
            "今日できたことをコメントで教えてください🌟\n\n"
            "どんな小さなことでも、自分を褒めてあげよう！\n"
            "みんなの頑張りを見て、明日も頑張れる！\n\n"
            "#今日の頑張り #毎日投稿 #振り返り #お疲れ様"
        ),
        "tags": ["今日の頑張り", "振り返り", "お疲れ様", "毎日投稿", "頑張った"],
        "prompt_comment": "今日できたことを新しいコメントで教えてね！朝の目標と合わせてまとめ動画で紹介します🌙",
    },
    "summary": {
        "title": "【{date}】みんなの今日の頑張り✨",
        "description": (
            "今日参加してくれたみんなの頑張りをまとめました！\n\n"
            "朝に目標を宣言して、夜に達成報告をしてくれた方々を\n"
            "キャラクターでアニメーション紹介しています🎉\n\n"
            "明日もみんなで頑張ろう！\n\n"
            "#今日の頑張り #みんなの頑張り #コミュニティ #毎日投稿"
        ),
        "tags": ["今日の頑張り", "みんなの頑張り", "コミュニティ", "まとめ", "毎日投稿"],
        "prompt_comment": "参加してくれたみんな、ありがとう！明日の朝もまた目標を教えてね✨",
    },
}


def build_video_metadata(slot: str, date: str, privacy_status: str = "public") -> Dict[str, Any]:
    """
    組成 videos.insert 的 request body

    Args:
        slot: morning | night | summary
        date: JST 日期 YYYY-MM-DD
        privacy_status: public | unlisted | private

    Returns:
        request body (snippet + status)
    """
    template = VIDEO_TEMPLATES.get(slot)
    if template is None:
        raise ValueError(f"Unknown video type: {slot}")

    return {
        "snippet": {
            "title": template["title"].format(date=format_japanese_date(date)),
            "description": template["description"],
            "tags": list(template["tags"]),
            "categoryId": CATEGORY_PEOPLE_AND_BLOGS,
            "defaultLanguage": "ja",
            "defaultAudioLanguage": "ja",
        },
        "status": {
            "privacyStatus": privacy_status,
            "selfDeclaredMadeForKids": False,
        },
    }


def upload_video(youtube: Any, file_path: str, body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resumable upload

    Args:
        youtube: YouTube v3 service
        file_path: 影片檔路徑
        body: build_video_metadata 的輸出

    Returns:
        videos.insert 的回應 (至少包含 id)
    """
    media = MediaFileUpload(file_path, chunksize=-1, resumable=True)
    request = youtube.videos().insert(part="snippet,status", body=body, media_body=media)

    logger.info(f"Uploading video: {file_path}")
    try:
        response = None
        while response is None:
            _status, response = request.next_chunk()
    except (HttpError, httplib2.HttpLib2Error, OSError) as e:
        raise UploadError(f"Upload failed for {file_path}: {e}") from e

    if not response.get("id"):
        raise UploadError(f"No video id in upload response: {response}")

    logger.info(f"✓ Uploaded video id={response['id']}")
    return response


def post_comment(youtube: Any, video_id: str, text: str) -> Optional[Dict[str, Any]]:
    """
    影片下方留下一則留言 (best-effort)

    Returns:
        commentThreads.insert 的回應，失敗時 None
    """
    body = {
        "snippet": {
            "videoId": video_id,
            "topLevelComment": {"snippet": {"textOriginal": text}},
        }
    }
    try:
        response = youtube.commentThreads().insert(part="snippet", body=body).execute()
    except Exception as e:
        logger.warning(f"Failed to post comment on {video_id}: {e}")
        return None

    logger.info(f"✓ Posted comment on {video_id}")
    return response


def prompt_comment_for(slot: str) -> str:
    return VIDEO_TEMPLATES[slot]["prompt_comment"]