"""
YouTube comment collector

commentThreads.list (order=time) 分頁抓取，正規化為 CanonicalComment。
暫時性錯誤 (429/5xx) 有限次數重試；其他錯誤立即以 FetchError 拋出。
"""

from typing import Any, Dict, List, Optional, Set
import logging

import httplib2
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception, before_sleep_log

from daily_cheer.errors import FetchError
from daily_cheer.models import CanonicalComment

logger = logging.getLogger(__name__)


PAGE_SIZE_LIMIT = 100
RETRYABLE_STATUS = {429, 500, 502, 503, 504}
MAX_BACKOFF_SECONDS = 60


def parse_comment_item(item: Dict[str, Any]) -> CanonicalComment:
    """
    將 commentThreads item 轉為 CanonicalComment

    缺少的欄位以空字串補上，不拋例外。

    Args:
        item: API 回傳的 commentThread resource

    Returns:
        CanonicalComment
    """
    thread_snippet = item.get('snippet') or {}
    top_level = thread_snippet.get('topLevelComment') or {}
    snippet = top_level.get('snippet') or {}
    author_channel = snippet.get('authorChannelId') or {}

    return CanonicalComment(
        comment_id=item.get('id') or "",
        author_id=author_channel.get('value') or "",
        author_name=snippet.get('authorDisplayName') or "",
        text=snippet.get('textDisplay') or "",
        published_at=snippet.get('publishedAt') or "",
        avatar_url=snippet.get('authorProfileImageUrl') or None,
    )


def _is_retryable(error: BaseException) -> bool:
    """只有 429/5xx 的 HttpError 會重試"""
    if not isinstance(error, HttpError):
        return False
    status = getattr(error.resp, 'status', None)
    try:
        return int(status) in RETRYABLE_STATUS
    except (TypeError, ValueError):
        return False


def _execute_page(
    youtube: Any,
    video_id: str,
    page_size: int,
    page_token: Optional[str],
    max_retries: int,
    backoff_seconds: float
) -> Dict[str, Any]:
    """執行單頁請求 (含重試)"""
    params = {
        'part': 'snippet',
        'videoId': video_id,
        'maxResults': page_size,
        'order': 'time',
    }
    if page_token:
        params['pageToken'] = page_token

    # retry 參數依設定決定
    @retry(
        reraise=True,
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=backoff_seconds, max=MAX_BACKOFF_SECONDS),
        retry=retry_if_exception(_is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    def _list_page() -> Dict[str, Any]:
        return youtube.commentThreads().list(**params).execute()

    try:
        return _list_page()
    except (HttpError, RefreshError, httplib2.HttpLib2Error, OSError) as e:
        raise FetchError(f"Failed to fetch comments for {video_id}: {e}") from e


def fetch_comments(
    youtube: Any,
    video_id: str,
    max_results: int = 100,
    max_retries: int = 3,
    backoff_seconds: float = 2.0
) -> List[CanonicalComment]:
    """
    抓取單一影片的留言

    Args:
        youtube: YouTube v3 service
        video_id: 影片 ID
        max_results: 最多抓取數
        max_retries: 暫時性錯誤重試次數
        backoff_seconds: 指數退避基數

    Returns:
        CanonicalComment 清單 (新到舊，以 comment_id 去重)
    """
    if not video_id:
        raise FetchError("video_id is required")

    logger.info(f"Fetching comments: video={video_id}, max_results={max_results}")

    comments: List[CanonicalComment] = []
    seen_ids: Set[str] = set()
    duplicates = 0
    page_token: Optional[str] = None

    while len(comments) < max_results:
        page_size = min(PAGE_SIZE_LIMIT, max_results - len(comments))
        response = _execute_page(youtube, video_id, page_size, page_token, max_retries, backoff_seconds)

        for item in response.get('items', []):
            comment = parse_comment_item(item)
            if comment.comment_id and comment.comment_id in seen_ids:
                duplicates += 1
                continue
            seen_ids.add(comment.comment_id)
            comments.append(comment)
            if len(comments) >= max_results:
                break

        page_token = response.get('nextPageToken')
        if not page_token:
            break

    if duplicates:
        logger.warning(f"Dropped {duplicates} duplicate comments across pages for {video_id}")

    logger.info(f"Collected {len(comments)} comments from {video_id}")
    return comments
