"""Exceptions raised while installing, running and assembling a build."""
import shlex
from typing import Sequence


def format_command(command: Sequence[object]) -> str:
    return shlex.join(str(part) for part in command)


class WorkerBundlerError(Exception):
    """Base class for every failure surfaced to the caller."""


class BuildIOError(WorkerBundlerError):
    """A file or directory could not be created, read, written or removed."""


class ManifestError(WorkerBundlerError):
    """package.json is missing, unreadable or has no `main` entry."""


class MalformedOutputError(WorkerBundlerError):
    """wrangler-js exited cleanly but its result file is not valid."""


class CommandError(WorkerBundlerError):
    """A subprocess exited with a nonzero status."""

    def __init__(self, command: Sequence[object], returncode: int):
        self.command = format_command(command)
        self.returncode = returncode
        super().__init__(
            f"failed to execute `{self.command}`: exited with {returncode}"
        )


class ToolFailedError(CommandError):
    """wrangler-js exited with a nonzero status."""


class InstallError(CommandError):
    """The package manager exited with a nonzero status."""


class CleanupFailedError(WorkerBundlerError):
    """The intermediate webpack dist directory could not be removed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"could not clean webpack dist {path}: {reason}")
