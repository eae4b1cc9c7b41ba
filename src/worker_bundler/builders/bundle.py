'''
Assembles the deployable worker from a wrangler-js build.
'''
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .build_result import BuildResult
from .errors import BuildIOError, CleanupFailedError
from .prologue import create_metadata, create_prologue, create_wasm_prologue
from ..utils.logging import setup_logger
from ..utils.size_formatter import format_size

logger = setup_logger()

# Directory where the bundle is written, relative to the project.
BUNDLE_OUT = Path("worker")
WASM_BINDING = "wasmprogram"


@dataclass
class BuildSummary:
    """Artifacts written by Bundle.write."""
    metadata_path: Path
    script_path: Path
    script_size: str
    wasm_path: Optional[Path] = None
    wasm_size: Optional[str] = None

    def __str__(self) -> str:
        if self.wasm_path is not None:
            return f"Sizes: wasm={self.wasm_size} script={self.script_size}"
        return f"Sizes: script={self.script_size}"


class Bundle:
    """The output of a build: script, optional wasm module and metadata."""

    def __init__(
        self,
        out_dir: Optional[Path] = None,
        project_dir: Path = Path("."),
        webpack_config: str = "webpack.config.js",
        wasm_binding: str = WASM_BINDING
    ):
        self.project_dir = project_dir
        self.out_dir = out_dir if out_dir is not None else project_dir / BUNDLE_OUT
        self.webpack_config = webpack_config
        self.wasm_binding = wasm_binding

    @property
    def metadata_path(self) -> Path:
        return self.out_dir / "metadata.json"

    @property
    def wasm_path(self) -> Path:
        return self.out_dir / "module.wasm"

    @property
    def script_path(self) -> Path:
        return self.out_dir / "script.js"

    def has_webpack_config(self) -> bool:
        return (self.project_dir / self.webpack_config).exists()

    def ensure_out_dir(self) -> Path:
        """Create the output directory if it does not exist yet."""
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildIOError(f"could not create {self.out_dir}: {e}") from e
        return self.out_dir

    def _write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise BuildIOError(f"could not write {path}: {e}") from e

    def compose_script(self, result: BuildResult) -> str:
        """Prologue(s) followed by the script produced by webpack."""
        script = create_prologue()
        if result.has_wasm:
            script += create_wasm_prologue(result.wasm_name, self.wasm_binding)
        return script + result.script

    def write(self, result: BuildResult) -> BuildSummary:
        """Write the bundle to disk and remove the webpack dist directory."""
        self.ensure_out_dir()

        logger.debug("create metadata; wasm=%s", result.has_wasm)
        binding = self.wasm_binding if result.has_wasm else None
        self._write(self.metadata_path, create_metadata(binding))

        summary = BuildSummary(
            metadata_path=self.metadata_path,
            script_path=self.script_path,
            script_size=format_size(result.script_size)
        )

        if result.has_wasm:
            self._write(self.wasm_path, result.wasm)
            summary.wasm_path = self.wasm_path
            summary.wasm_size = format_size(result.wasm_size)

        self._write(self.script_path, self.compose_script(result))

        # Outputs are on disk; the dist directory can go.
        logger.info("Remove %s", result.dist_to_clean)
        try:
            shutil.rmtree(result.dist_to_clean)
        except OSError as e:
            raise CleanupFailedError(result.dist_to_clean, str(e)) from e

        print(summary)
        return summary
