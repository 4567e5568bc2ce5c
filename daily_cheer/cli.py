"""
CLI: Command Line Interface for Daily Cheer

支援 init-config、fetch、render、upload、status、duration 命令。
由外部 scheduler 每日依序呼叫：
    render/upload --type morning → render/upload --type night → fetch → render/upload --type summary
"""

import click
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Type

from google.auth.exceptions import RefreshError, TransportError

from daily_cheer.config import DailyCheerConfig
from daily_cheer.errors import DailyCheerError, ConfigError, FetchError, UploadError
from daily_cheer.collectors.youtube_comments import fetch_comments
from daily_cheer.processing.merge import merge_comments, build_dataset
from daily_cheer.processing.timeline import section_starts, summary_duration
from daily_cheer.publishing.youtube_client import build_credentials, build_youtube_service
from daily_cheer.publishing.uploader import build_video_metadata, upload_video, post_comment, prompt_comment_for
from daily_cheer.render.remotion import build_props, render_video
from daily_cheer.storage.file_store import FileStore
from daily_cheer.storage.ledger import LedgerStore, record_upload
from daily_cheer.models import SLOTS
from daily_cheer.utils.time import jst_date, jst_isoformat

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


SLOT_CHOICE = click.Choice(list(SLOTS))

DEFAULT_CONFIG = """# Daily Cheer Configuration
output_dir: "output"
ledger_path: "output/status.json"
fps: 30

youtube:
  client_id_env: "YOUTUBE_CLIENT_ID"
  client_secret_env: "YOUTUBE_CLIENT_SECRET"
  refresh_token_env: "YOUTUBE_REFRESH_TOKEN"
  # channel_id: "UCxxxxxxxx"   # 抓取時排除自己頻道的留言
  max_results: 100
  max_retries: 3
  timeout_seconds: 60

render:
  command: ["npx", "remotion", "render"]
  entry_point: "src/index.ts"
  project_dir: "."
  codec: "h264"
  gl: "swangle"

upload:
  privacy_status: "public"
  post_prompt_comment: true
"""


def _abort(error: Exception) -> None:
    """印出診斷訊息並以非 0 結束"""
    logger.error(f"{type(error).__name__}: {error}")
    click.echo(f"✗ {error}", err=True)
    sys.exit(1)


def _youtube_service(cfg: DailyCheerConfig, error_cls: Type[DailyCheerError]) -> Any:
    """建立 YouTube service (憑證缺少時在網路呼叫前失敗)"""
    creds = cfg.load_credentials()
    try:
        credentials = build_credentials(creds, cfg.youtube.scopes)
    except (RefreshError, TransportError, RuntimeError) as e:
        raise error_cls(f"OAuth refresh failed: {e}") from e
    return build_youtube_service(credentials, cfg.youtube.timeout_seconds)


def _resolve_video_id(explicit: Optional[str], env_name: str, slot: str,
                      ledger: LedgerStore, today: str) -> Optional[str]:
    """video id 優先序：命令列 → 環境變數 → ledger"""
    if explicit:
        return explicit
    if os.environ.get(env_name):
        return os.environ[env_name]

    record = ledger.latest_record(slot)
    if record is None:
        return None
    if record.date != today:
        logger.warning(f"Latest {slot} video in ledger is from {record.date}, not {today}")
    return record.video_id


@click.group()
@click.option('--config', 'config_path', default=None, help='Config YAML file path')
@click.pass_context
def cli(ctx, config_path: Optional[str]):
    """Daily Cheer: 朝の目標 × 夜の達成 comment loop"""
    ctx.obj = DailyCheerConfig.load(config_path)


@cli.command()
@click.option('--out', default='config.example.yaml', help='Output config file path')
def init_config(out: str):
    """產生範本設定檔"""
    with open(out, 'w', encoding='utf-8') as f:
        f.write(DEFAULT_CONFIG)

    click.echo(f"✓ Config file created: {out}")
    click.echo(f"  Edit this file and run: python -m daily_cheer --config {out} fetch")


@cli.command()
@click.option('--morning-id', default=None, help='朝の動画 ID (預設：MORNING_VIDEO_ID → ledger)')
@click.option('--night-id', default=None, help='夜の動画 ID (預設：NIGHT_VIDEO_ID → ledger)')
@click.pass_obj
def fetch(cfg: DailyCheerConfig, morning_id: Optional[str], night_id: Optional[str]):
    """抓取朝/夜留言、合併並寫出當日 dataset"""
    try:
        today = jst_date()
        click.echo(f"Date (JST): {today}")

        ledger = LedgerStore(cfg.ledger_path)
        morning_id = _resolve_video_id(morning_id, "MORNING_VIDEO_ID", "morning", ledger, today)
        night_id = _resolve_video_id(night_id, "NIGHT_VIDEO_ID", "night", ledger, today)
        if not morning_id or not night_id:
            raise ConfigError("Morning and night video ids are required "
                              "(--morning-id/--night-id, MORNING_VIDEO_ID/NIGHT_VIDEO_ID, or the ledger)")

        youtube = _youtube_service(cfg, FetchError)
        yt = cfg.youtube

        logger.info("=" * 40)
        logger.info("STEP 1: Fetching comments")
        logger.info("=" * 40)

        morning = fetch_comments(youtube, morning_id, yt.max_results, yt.max_retries, yt.retry_backoff_seconds)
        click.echo(f"✓ Morning ({morning_id}): {len(morning)} comments")
        night = fetch_comments(youtube, night_id, yt.max_results, yt.max_retries, yt.retry_backoff_seconds)
        click.echo(f"✓ Night ({night_id}): {len(night)} comments")

        if yt.channel_id:
            morning = [c for c in morning if c.author_id != yt.channel_id]
            night = [c for c in night if c.author_id != yt.channel_id]

        logger.info("=" * 40)
        logger.info("STEP 2: Merging")
        logger.info("=" * 40)

        entries = merge_comments(morning, night)
        dataset = build_dataset(today, morning_id, night_id, entries)

        logger.info("=" * 40)
        logger.info("STEP 3: Writing dataset")
        logger.info("=" * 40)

        output_path = FileStore(cfg.output_dir).save_dataset(dataset)
        stats = dataset.stats
        click.echo(f"✓ {stats.total_users} users → {output_path}")
        click.echo(f"  both={stats.both_commented}, morning only={stats.morning_only}, "
                   f"night only={stats.night_only}")
    except DailyCheerError as e:
        _abort(e)


@cli.command()
@click.option('--type', 'slot', required=True, type=SLOT_CHOICE, help='動画タイプ')
@click.pass_obj
def render(cfg: DailyCheerConfig, slot: str):
    """呼叫 renderer 產生當日影片"""
    try:
        today = jst_date()
        store = FileStore(cfg.output_dir)
        comments = None

        if slot == "summary":
            dataset = store.read_dataset(today)
            if dataset is None:
                raise ConfigError(f"Dataset not found: {store.dataset_path(today)} (run fetch first)")
            if not dataset.comments:
                click.echo("No comments today, skipping summary video")
                return
            comments = dataset.comments
            click.echo(f"Summary video for {len(comments)} users")

        props = build_props(slot, today, cfg.fps, comments)
        output_path = render_video(cfg.render, slot, props,
                                   store.props_path(slot, today), store.video_path(slot, today))
        click.echo(f"✓ Rendered {slot} video ({props['durationInFrames']} frames): {output_path}")
    except DailyCheerError as e:
        _abort(e)


@cli.command()
@click.option('--type', 'slot', required=True, type=SLOT_CHOICE, help='動画タイプ')
@click.option('--file', 'file_path', default=None, help='影片檔 (預設：<output_dir>/<type>_<date>.mp4)')
@click.pass_obj
def upload(cfg: DailyCheerConfig, slot: str, file_path: Optional[str]):
    """上傳當日影片並更新 status ledger"""
    try:
        today = jst_date()
        video_path = Path(file_path) if file_path else FileStore(cfg.output_dir).video_path(slot, today)
        if not video_path.exists():
            raise ConfigError(f"Video file not found: {video_path}")

        ledger_store = LedgerStore(cfg.ledger_path)
        ledger = ledger_store.load()

        youtube = _youtube_service(cfg, UploadError)
        body = build_video_metadata(slot, today, cfg.upload.privacy_status)
        response = upload_video(youtube, str(video_path), body)
        video_id = response["id"]
        title = body["snippet"]["title"]

        click.echo("✓ Upload succeeded")
        click.echo(f"  Video ID: {video_id}")
        click.echo(f"  URL: https://www.youtube.com/watch?v={video_id}")

        if cfg.upload.post_prompt_comment:
            post_comment(youtube, video_id, prompt_comment_for(slot))

        record_upload(ledger, slot, video_id, today, jst_isoformat(), title)
        ledger_store.save(ledger)
        click.echo(f"✓ Ledger updated: {ledger_store.path}")
    except DailyCheerError as e:
        _abort(e)


@cli.command()
@click.pass_obj
def status(cfg: DailyCheerConfig):
    """顯示 status ledger"""
    try:
        ledger = LedgerStore(cfg.ledger_path).load()
    except DailyCheerError as e:
        _abort(e)
        return

    click.echo(f"Last updated: {ledger.last_updated or '-'}")
    for slot in SLOTS:
        record = ledger.videos.get(slot)
        if record:
            click.echo(f"  {slot:8s} {record.video_id} ({record.date}, {record.uploaded_at})")
        else:
            click.echo(f"  {slot:8s} -")
    click.echo(f"History: {len(ledger.history)} entries")


@cli.command()
@click.option('--users', required=True, type=click.IntRange(min=0), help='使用者數')
@click.option('--fps', default=None, type=click.IntRange(min=1), help='FPS (預設：設定檔)')
@click.pass_obj
def duration(cfg: DailyCheerConfig, users: int, fps: Optional[int]):
    """計算 summary video 的 timeline (preview 用)"""
    fps = fps or cfg.fps
    total = summary_duration(users, fps)
    click.echo(f"Total: {total} frames ({total / fps:.1f}s @ {fps}fps)")
    for name, frame in section_starts(users, fps).items():
        click.echo(f"  {name:10s} {frame}")


if __name__ == "__main__":
    cli()
