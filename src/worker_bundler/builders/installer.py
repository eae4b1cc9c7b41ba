'''
Installs wrangler-js and the project dependencies through npm.
'''
import subprocess
from pathlib import Path
from typing import List, Optional

from .errors import BuildIOError, InstallError, format_command
from .wranglerjs import TOOL_NAME
from ..utils.logging import setup_logger

logger = setup_logger()


def _run_package_manager(command: List[str], cwd: Optional[Path]) -> None:
    logger.info("Running %s", format_command(command))
    try:
        completed = subprocess.run(command, cwd=cwd, check=False)
    except OSError as e:
        raise BuildIOError(f"could not run `{format_command(command)}`: {e}") from e

    if completed.returncode != 0:
        raise InstallError(command, completed.returncode)


def run_npm_install(cwd: Optional[Path] = None, package_manager: str = "npm") -> None:
    """Install the dependencies declared in package.json."""
    _run_package_manager([package_manager, "install"], cwd)


def install(
    tool: str = TOOL_NAME,
    cwd: Optional[Path] = None,
    package_manager: str = "npm"
) -> None:
    """Install wrangler-js into the local node_modules."""
    _run_package_manager([package_manager, "install", tool], cwd)
