"""
Tests for renderer props and invocation
"""

import json
import subprocess
import pytest

from daily_cheer.config import RenderConfig
from daily_cheer.errors import RenderError
from daily_cheer.models import AggregateUserEntry
from daily_cheer.processing.timeline import summary_duration, short_duration
from daily_cheer.render import remotion
from daily_cheer.render.remotion import build_props, build_command, render_video
from daily_cheer.utils.hashing import morning_bgm, night_bgm, praise_for


def create_entry(user_id: str, goal=None, achievement=None) -> AggregateUserEntry:
    return AggregateUserEntry(
        username=user_id.upper(),
        user_id=user_id,
        morning_goal=goal,
        night_achievement=achievement,
        avatar_color="#FF6B6B",
    )


def test_summary_props():
    """測試 summary props 包含 comments 與依人數計算的長度"""
    entries = [create_entry("u1", "g", "a"), create_entry("u2", goal="g")]

    props = build_props("summary", "2026-10-19", 30, entries)

    assert props["date"] == "2026-10-19"
    assert props["durationInFrames"] == summary_duration(2, 30)
    assert props["bgm"] == night_bgm("2026-10-19")
    assert props["comments"][0]["userId"] == "u1"
    assert props["comments"][0]["praise"] == praise_for("u1")
    assert "nightAchievement" not in props["comments"][1]
    assert "avatarUrl" not in props["comments"][1]


def test_short_props():
    """測試朝/夜 props"""
    props = build_props("morning", "2026-10-19", 30)

    assert props == {
        "date": "2026-10-19",
        "bgm": morning_bgm("2026-10-19"),
        "durationInFrames": short_duration(30),
    }


def test_build_command(tmp_path):
    cfg = RenderConfig()
    cmd = build_command(cfg, "summary", tmp_path / "props.json", tmp_path / "out.mp4")

    assert cmd[:3] == ["npx", "remotion", "render"]
    assert cmd[3] == "src/index.ts"
    assert cmd[4] == "SummaryVideo"
    assert f"--props={(tmp_path / 'props.json').resolve()}" in cmd
    assert "--codec=h264" in cmd
    assert "--gl=swangle" in cmd


def test_render_video(tmp_path, monkeypatch):
    """測試寫出 props 檔並呼叫 renderer"""
    calls = []

    def fake_run(cmd, cwd, capture_output, text):
        calls.append(cmd)
        (tmp_path / "out.mp4").write_bytes(b"\x00")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(remotion.subprocess, "run", fake_run)
    props = build_props("night", "2026-10-19", 30)

    result = render_video(RenderConfig(), "night", props, tmp_path / "props.json", tmp_path / "out.mp4")

    assert result == tmp_path / "out.mp4"
    assert json.loads((tmp_path / "props.json").read_text(encoding="utf-8")) == props
    assert calls[0][4] == "NightVideo"


def test_render_failure(tmp_path, monkeypatch):
    """測試 renderer 失敗是 RenderError"""
    def fake_run(cmd, cwd, capture_output, text):
        return subprocess.CompletedProcess(cmd, 1, "", "boom")

    monkeypatch.setattr(remotion.subprocess, "run", fake_run)

    with pytest.raises(RenderError):
        render_video(RenderConfig(), "morning", build_props("morning", "2026-10-19", 30),
                     tmp_path / "props.json", tmp_path / "out.mp4")


def test_render_failure_removes_artifacts(tmp_path, monkeypatch):
    """測試 renderer 失敗時不留下 props 檔與不完整的影片"""
    def fake_run(cmd, cwd, capture_output, text):
        (tmp_path / "out.mp4").write_bytes(b"\x00")
        return subprocess.CompletedProcess(cmd, 1, "", "killed")

    monkeypatch.setattr(remotion.subprocess, "run", fake_run)

    with pytest.raises(RenderError):
        render_video(RenderConfig(), "night", build_props("night", "2026-10-19", 30),
                     tmp_path / "props.json", tmp_path / "out.mp4")
    assert not (tmp_path / "props.json").exists()
    assert not (tmp_path / "out.mp4").exists()


def test_renderer_not_installed(tmp_path, monkeypatch):
    def fake_run(cmd, cwd, capture_output, text):
        raise FileNotFoundError("npx")

    monkeypatch.setattr(remotion.subprocess, "run", fake_run)

    with pytest.raises(RenderError):
        render_video(RenderConfig(), "morning", build_props("morning", "2026-10-19", 30),
                     tmp_path / "props.json", tmp_path / "out.mp4")
    assert not (tmp_path / "props.json").exists()
