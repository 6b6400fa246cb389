"""ffmpeg execution.

Runs a Command with the imageio-ffmpeg binary, inheriting stdout/stderr
so ffmpeg's own progress and errors reach the terminal unmodified.
"""

import subprocess
from dataclasses import dataclass
from typing import Callable

import imageio_ffmpeg

from .builder import Command

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


@dataclass(frozen=True)
class ExecutionResult:
    success: bool
    error_message: str | None = None


Execute = Callable[[Command], ExecutionResult]


def run_ffmpeg(command: Command) -> ExecutionResult:
    """Run ffmpeg to completion. Never retries."""
    try:
        subprocess.run(command.to_args(_FFMPEG), check=True)
    except subprocess.CalledProcessError as e:
        return ExecutionResult(False, f"ffmpeg exited with status {e.returncode}")
    except OSError as e:
        return ExecutionResult(False, str(e))
    return ExecutionResult(True)
