"""Clip probing — duration and frame geometry for each input clip.

Uses moviepy's ffmpeg info parser, which runs the imageio-ffmpeg binary
(imageio-ffmpeg does NOT bundle ffprobe). Probing never raises for a
missing or unreadable file: it returns a ClipInfo with exists=False and
callers branch on that.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from moviepy.video.io.ffmpeg_reader import ffmpeg_parse_infos

from .errors import MissingClipError


@dataclass(frozen=True)
class ClipInfo:
    path: str
    exists: bool
    width: int | None = None
    height: int | None = None
    frame_rate: str | None = None
    duration: float | None = None


Probe = Callable[[str], ClipInfo]


def _format_fps(fps) -> str | None:
    if not fps:
        return None
    return f"{float(fps):g}"


def probe_clip(path: str) -> ClipInfo:
    """Probe one clip for geometry, frame rate and duration.

    A file that exists but whose duration can't be read still counts as
    existing, with duration=None. Duration adjustment skips such clips.
    """
    if not Path(path).is_file():
        return ClipInfo(path=path, exists=False)

    try:
        infos = ffmpeg_parse_infos(str(path))
    except (OSError, ValueError):
        # No readable duration; retry for geometry alone.
        try:
            infos = ffmpeg_parse_infos(str(path), check_duration=False)
        except (OSError, ValueError):
            return ClipInfo(path=path, exists=False)
        infos["duration"] = None

    if not infos.get("video_found"):
        return ClipInfo(path=path, exists=False)

    width, height = infos.get("video_size") or (None, None)
    duration = infos.get("duration")
    return ClipInfo(
        path=path,
        exists=True,
        width=width,
        height=height,
        frame_rate=_format_fps(infos.get("video_fps")),
        duration=float(duration) if duration else None,
    )


def validate_videos(paths, probe: Probe = probe_clip) -> list[ClipInfo]:
    """Probe every clip up front, in input order.

    Returns:
        One ClipInfo per path, same order as ``paths``.

    Raises:
        MissingClipError: Lists all missing clips, not just the first.
    """
    infos = [probe(p) for p in paths]
    missing = [info.path for info in infos if not info.exists]
    if missing:
        raise MissingClipError(missing)
    return infos
