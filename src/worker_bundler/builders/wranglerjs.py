'''
Runs the wrangler-js bundler and reads back its result.
'''
import os
import subprocess
import tempfile
from pathlib import Path
from typing import List

from .build_result import BuildResult
from .bundle import Bundle
from .errors import (
    BuildIOError,
    MalformedOutputError,
    ToolFailedError,
    format_command,
)
from ..config.package import Package
from ..utils.logging import setup_logger

logger = setup_logger()

TOOL_NAME = "wrangler-js"


def executable_path(project_dir: Path = Path("."), tool_name: str = TOOL_NAME) -> Path:
    """Path to wrangler-js as installed by npm; it should be executable."""
    return project_dir / "node_modules" / ".bin" / tool_name


def is_installed(project_dir: Path = Path("."), tool_name: str = TOOL_NAME) -> bool:
    """Check if wrangler-js is present at its known location.

    A PermissionError while probing the path propagates to the caller.
    """
    return executable_path(project_dir, tool_name).exists()


def _build_command(output_file: Path, bundle: Bundle, tool_name: str) -> List[str]:
    command = [
        str(executable_path(bundle.project_dir, tool_name).absolute()),
        f"--output-file={output_file}",
    ]

    # Without a webpack.config.js, infer the entry from package.json.
    if not bundle.has_webpack_config():
        package = Package.load(bundle.project_dir)
        command.append("--no-webpack-config=1")
        command.append(f"--use-entry={package.entry_path(bundle.project_dir)}")

    return command


def _remove_output(output_file: Path) -> None:
    try:
        output_file.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove %s: %s", output_file, e)


def _read_output(output_file: Path) -> str:
    try:
        return output_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedOutputError(f"wranglerjs output is not valid UTF-8: {e}") from e
    except OSError as e:
        raise BuildIOError(f"could not retrieve output from {output_file}: {e}") from e
    finally:
        _remove_output(output_file)


def run_build(
    wasm_pack_path: Path,
    bundle: Bundle,
    tool_name: str = TOOL_NAME
) -> BuildResult:
    """Run wrangler-js and wait for completion.

    wrangler-js is handed the path of an empty temporary file which it fills
    with a serialized BuildResult before exiting. The file is removed before
    this returns or raises.
    """
    bundle.ensure_out_dir()

    # temp file for wrangler-js IPC
    try:
        fd, name = tempfile.mkstemp(prefix=".wranglerjs_output")
        os.close(fd)
    except OSError as e:
        raise BuildIOError(f"could not create wranglerjs output file: {e}") from e
    output_file = Path(name)

    try:
        command = _build_command(output_file, bundle, tool_name)
    except Exception:
        _remove_output(output_file)
        raise

    env = {**os.environ, "WASM_PACK_PATH": str(wasm_pack_path)}

    logger.info("Running %s", format_command(command))
    try:
        completed = subprocess.run(
            command, cwd=bundle.project_dir, env=env, check=False
        )
    except OSError as e:
        _remove_output(output_file)
        raise BuildIOError(f"could not run `{format_command(command)}`: {e}") from e

    # Nothing written by a failed run is trusted.
    if completed.returncode != 0:
        _remove_output(output_file)
        raise ToolFailedError(command, completed.returncode)

    return BuildResult.parse_output(_read_output(output_file))
