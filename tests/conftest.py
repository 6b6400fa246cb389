"""Shared test fixtures for clipassemble tests."""

import subprocess

import pytest
import imageio_ffmpeg

from clipassemble.probe import ClipInfo
from clipassemble.runner import ExecutionResult

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


@pytest.fixture
def make_clip(tmp_path):
    """Factory: render a silent solid-color test video (320x240, 10fps).

    Used by the probe and end-to-end tests, which need real files.
    """
    def _make(name="clip.mp4", duration=3, color="blue"):
        out = tmp_path / name
        subprocess.run(
            [
                _FFMPEG, "-y",
                "-f", "lavfi", "-i", f"color=c={color}:s=320x240:d={duration}:r=10",
                "-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p",
                str(out),
            ],
            check=True,
            capture_output=True,
        )
        return out
    return _make


class FakeProbe:
    """In-memory probe. Paths not in ``durations`` don't exist.

    A duration of None simulates a clip whose duration can't be read.
    """

    def __init__(self, durations):
        self.durations = dict(durations)
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if path not in self.durations:
            return ClipInfo(path=path, exists=False)
        return ClipInfo(
            path=path, exists=True, width=1920, height=1080,
            frame_rate="30", duration=self.durations[path],
        )


class FakeExecute:
    """Records commands instead of running ffmpeg."""

    def __init__(self, success=True, error_message=None):
        self.result = ExecutionResult(success, error_message)
        self.commands = []

    def __call__(self, command):
        self.commands.append(command)
        return self.result


@pytest.fixture
def fake_probe():
    return FakeProbe


@pytest.fixture
def fake_execute():
    return FakeExecute
