"""
Shared fakes for the YouTube Data API service
"""

import pytest
from typing import Any, Dict, List, Optional


class FakeRequest:
    """模擬 googleapiclient 的 HttpRequest"""

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error

    def execute(self):
        if self.error:
            raise self.error
        return self.response

    def next_chunk(self):
        if self.error:
            raise self.error
        return None, self.response


class FakeCommentThreads:
    """commentThreads() resource: 依 videoId 回傳預先準備的分頁"""

    def __init__(self, pages: Dict[str, List[List[Dict[str, Any]]]], errors: List[Exception],
                 insert_error: Optional[Exception]):
        self.pages = pages
        self.errors = errors
        self.insert_error = insert_error
        self.calls: List[Dict[str, Any]] = []
        self.inserted: List[Dict[str, Any]] = []

    def list(self, **params):
        self.calls.append(params)
        if self.errors:
            return FakeRequest(error=self.errors.pop(0))

        video_id = params['videoId']
        video_pages = self.pages.get(video_id, [[]])
        token = params.get('pageToken')
        index = int(token.rsplit('-', 1)[1]) if token else 0

        response: Dict[str, Any] = {'items': video_pages[index]}
        if index + 1 < len(video_pages):
            response['nextPageToken'] = f"{video_id}-{index + 1}"
        return FakeRequest(response)

    def insert(self, part, body):
        self.inserted.append(body)
        if self.insert_error:
            return FakeRequest(error=self.insert_error)
        return FakeRequest({'id': 'posted-comment'})


class FakeVideos:
    """videos() resource"""

    def __init__(self, video_id: str, error: Optional[Exception]):
        self.video_id = video_id
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def insert(self, part, body, media_body):
        self.calls.append({'part': part, 'body': body, 'media_body': media_body})
        return FakeRequest({'id': self.video_id, 'snippet': body['snippet']}, self.error)


class FakeYouTube:
    def __init__(self, pages=None, errors=None, upload_id="uploaded-id", upload_error=None,
                 comment_error=None):
        self.threads = FakeCommentThreads(pages or {}, list(errors or []), comment_error)
        self.video_resource = FakeVideos(upload_id, upload_error)

    def commentThreads(self):
        return self.threads

    def videos(self):
        return self.video_resource


def thread_item(comment_id: str, author_id: Optional[str], name: str, text: str,
                avatar: Optional[str] = None) -> Dict[str, Any]:
    """commentThreads item (API 回傳格式)"""
    snippet: Dict[str, Any] = {
        'authorDisplayName': name,
        'textDisplay': text,
        'publishedAt': '2026-10-19T07:00:00Z',
    }
    if author_id is not None:
        snippet['authorChannelId'] = {'value': author_id}
    if avatar is not None:
        snippet['authorProfileImageUrl'] = avatar

    return {
        'id': comment_id,
        'snippet': {'topLevelComment': {'id': comment_id, 'snippet': snippet}},
    }


@pytest.fixture
def make_youtube():
    return FakeYouTube


@pytest.fixture
def make_item():
    return thread_item
