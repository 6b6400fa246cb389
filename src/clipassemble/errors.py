"""Exception types raised while planning or running an assembly.

Everything derives from AssemblyError so the CLI can report any planning
failure with a single except clause. Each subclass also derives from the
builtin that best describes it, so callers can catch FileNotFoundError or
ValueError without importing this module.
"""


class AssemblyError(Exception):
    """Base class for all clipassemble failures."""


class MissingClipError(AssemblyError, FileNotFoundError):
    """One or more input clips could not be probed.

    ``paths`` holds every missing clip, in input order.
    """

    def __init__(self, paths):
        self.paths = list(paths)
        msg = f"Missing {len(self.paths)} video file(s):\n"
        for p in self.paths:
            msg += f"  - {p}\n"
        super().__init__(msg)


class InsufficientClipsError(AssemblyError, ValueError):
    """The method needs more clips than were given."""


class UnknownMethodError(AssemblyError, ValueError):
    """The method key is not one of the known methods."""


class ManifestError(AssemblyError, ValueError):
    """The YAML assembly manifest is malformed."""


class FilterGraphError(AssemblyError, ValueError):
    """A filter graph references an undefined pad or defines one twice."""


class ExternalToolError(AssemblyError, RuntimeError):
    """ffmpeg exited with a non-zero status."""
