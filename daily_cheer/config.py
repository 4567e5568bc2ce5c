"""
Configuration schemas using Pydantic

設定檔 (YAML) 只存放非機密設定；OAuth 憑證只存放「環境變數名稱」，
由 load_credentials() 一次性讀出並組成 YouTubeCredentials 傳入 client。
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field
from dotenv import load_dotenv
import os

from daily_cheer.errors import ConfigError


class YouTubeCredentials(BaseModel):
    """OAuth refresh-token 憑證 (明確傳遞，不從環境隱式讀取)"""
    client_id: str
    client_secret: str
    refresh_token: str


class YouTubeConfig(BaseModel):
    """YouTube Data API 設定"""
    client_id_env: str = Field(default="YOUTUBE_CLIENT_ID", description="client id 環境變數名稱")
    client_secret_env: str = Field(default="YOUTUBE_CLIENT_SECRET", description="client secret 環境變數名稱")
    refresh_token_env: str = Field(default="YOUTUBE_REFRESH_TOKEN", description="refresh token 環境變數名稱")
    scopes: List[str] = Field(
        default_factory=lambda: ["https://www.googleapis.com/auth/youtube.force-ssl"],
        description="OAuth scopes (commentThreads 需要 force-ssl)"
    )
    channel_id: Optional[str] = Field(None, description="自己頻道的 channel ID (抓取時排除自己的留言)")
    max_results: int = Field(default=100, description="每支影片最多抓取留言數")
    max_retries: int = Field(default=3, description="暫時性錯誤 (429/5xx) 重試次數")
    retry_backoff_seconds: float = Field(default=2.0, description="指數退避的基數 (秒)")
    timeout_seconds: float = Field(default=60.0, description="HTTP timeout (秒)")


class RenderConfig(BaseModel):
    """Remotion renderer 設定"""
    command: List[str] = Field(
        default_factory=lambda: ["npx", "remotion", "render"],
        description="Renderer CLI 指令"
    )
    entry_point: str = Field(default="src/index.ts", description="Remotion entry point")
    project_dir: str = Field(default=".", description="Remotion 專案目錄 (subprocess cwd)")
    codec: str = Field(default="h264", description="輸出 codec")
    gl: str = Field(default="swangle", description="Chromium GL backend")
    compositions: dict = Field(
        default_factory=lambda: {
            "morning": "MorningVideo",
            "night": "NightVideo",
            "summary": "SummaryVideo",
        },
        description="slot -> composition id"
    )


class UploadConfig(BaseModel):
    """上傳設定"""
    privacy_status: Literal["public", "unlisted", "private"] = Field(default="public")
    post_prompt_comment: bool = Field(default=True, description="上傳後是否留下引導留言 (best-effort)")


class DailyCheerConfig(BaseModel):
    """完整設定 schema"""
    output_dir: str = Field(default="output", description="輸出目錄 (影片、每日 dataset)")
    ledger_path: str = Field(default="output/status.json", description="Status ledger 路徑")
    fps: int = Field(default=30, description="影片 FPS")

    youtube: YouTubeConfig = Field(default_factory=YouTubeConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "DailyCheerConfig":
        """從 YAML 檔案載入設定"""
        import yaml
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def load(cls, yaml_path: Optional[str] = None) -> "DailyCheerConfig":
        """載入 .env 後讀取 YAML (未指定時使用預設值)，OUTPUT_DIR 環境變數可覆寫 output_dir"""
        load_dotenv()
        cfg = cls.from_yaml(yaml_path) if yaml_path else cls()
        env_output = os.environ.get("OUTPUT_DIR")
        if env_output:
            cfg.output_dir = env_output
        return cfg

    def load_credentials(self) -> YouTubeCredentials:
        """從環境變數讀取 OAuth 憑證 (缺少任何一項即 ConfigError)"""
        names = {
            "client_id": self.youtube.client_id_env,
            "client_secret": self.youtube.client_secret_env,
            "refresh_token": self.youtube.refresh_token_env,
        }
        values = {key: os.environ.get(env_name, "") for key, env_name in names.items()}
        missing = [names[key] for key, value in values.items() if not value]
        if missing:
            raise ConfigError(f"Missing YouTube credentials in environment: {', '.join(missing)}")
        return YouTubeCredentials(**values)
