"""
YouTube Data API client construction

憑證由呼叫端明確傳入 (YouTubeCredentials)；token refresh 交給 google-auth。
"""

from typing import Any, List, Optional
import logging

import httplib2
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from daily_cheer.config import YouTubeCredentials

logger = logging.getLogger(__name__)


TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credentials(creds: YouTubeCredentials, scopes: Optional[List[str]] = None) -> Credentials:
    """
    以 refresh token 建立並刷新 OAuth 憑證

    Args:
        creds: client id / secret / refresh token
        scopes: OAuth scopes (None 表示沿用 refresh token 原本授權的 scopes)

    Returns:
        已刷新的 Credentials
    """
    credentials = Credentials(
        token=None,
        refresh_token=creds.refresh_token,
        token_uri=TOKEN_URI,
        client_id=creds.client_id,
        client_secret=creds.client_secret,
        scopes=scopes,
    )
    credentials.refresh(Request())
    if not credentials.valid:
        raise RuntimeError("Credentials not valid after refresh")
    logger.info("✓ OAuth credentials refreshed")
    return credentials


def build_youtube_service(credentials: Credentials, timeout_seconds: float = 60.0) -> Any:
    """
    建立 YouTube v3 service (所有 execute() 都套用 timeout)

    Args:
        credentials: OAuth 憑證
        timeout_seconds: HTTP timeout

    Returns:
        googleapiclient Resource
    """
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout_seconds))
    return build("youtube", "v3", http=http, cache_discovery=False)
