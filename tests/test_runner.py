"""End-to-end tests: plan and run real ffmpeg on synthetic clips.

Uses moviepy for duration probing of the output (same as probe.py).
"""

from moviepy import VideoFileClip

from clipassemble.builder import Command
from clipassemble.config import Configuration
from clipassemble.methods import SideBySide, Simple, Transition
from clipassemble.planner import CompositionPlanner
from clipassemble.runner import run_ffmpeg


def _get_duration(path):
    with VideoFileClip(str(path)) as clip:
        return clip.duration


def _quiet_planner():
    return CompositionPlanner(echo=lambda *a: None)


class TestRunFFmpeg:
    def test_failure_reports_status(self, tmp_path):
        command = Command(
            inputs=(str(tmp_path / "missing.mp4"),),
            output_path=str(tmp_path / "out.mp4"),
            encoding={"-c": "copy"},
        )
        result = run_ffmpeg(command)
        assert not result.success
        assert "status" in result.error_message


class TestAssembleEndToEnd:
    def test_simple_concat(self, make_clip, tmp_path):
        a = make_clip("a.mp4", duration=2, color="red")
        b = make_clip("b.mp4", duration=3, color="blue")
        out = tmp_path / "simple.mp4"
        config = Configuration(method=Simple(), clips=[str(a), str(b)], output_path=str(out))
        _quiet_planner().run(config)
        assert out.exists()
        assert 4.5 < _get_duration(out) < 5.5
        assert not (tmp_path / "simple.concat.txt").exists()

    def test_fade_auto_adjusts_to_short_clips(self, make_clip, tmp_path):
        a = make_clip("a.mp4", duration=3, color="red")
        b = make_clip("b.mp4", duration=3, color="blue")
        out = tmp_path / "fade.mp4"
        config = Configuration(
            method=Transition("fade"), clips=[str(a), str(b)], output_path=str(out),
        )
        plan = _quiet_planner().run(config)
        assert plan.timing.clip_duration == 2
        # Two 2s clips overlapping by 1s.
        assert 2.5 < _get_duration(out) < 3.5

    def test_side_by_side_grid(self, make_clip, tmp_path):
        clips = [str(make_clip(f"{i}.mp4", duration=2)) for i in range(3)]
        out = tmp_path / "grid.mp4"
        config = Configuration(method=SideBySide(), clips=clips, output_path=str(out))
        _quiet_planner().run(config)
        with VideoFileClip(str(out)) as clip:
            assert tuple(clip.size) == (1920, 1080)
