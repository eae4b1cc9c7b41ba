# workflows/build_workflow.py
import shutil
from pathlib import Path

from ..builders import installer, wranglerjs
from ..builders.bundle import Bundle, BuildSummary
from ..config.settings import Settings
from ..utils.logging import setup_logger

logger = setup_logger()


class BuildWorkflow:
    """Install wrangler-js if needed, run it and write the bundle."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.bundle = Bundle(
            out_dir=settings.bundle_out_dir(),
            project_dir=settings.project_dir,
            webpack_config=settings.webpack_config,
            wasm_binding=settings.wasm_binding
        )

    def resolve_wasm_pack_path(self) -> Path:
        """Configured wasm-pack, else the one on PATH, else the bare name."""
        if self.settings.wasm_pack_path is not None:
            return self.settings.wasm_pack_path
        found = shutil.which("wasm-pack")
        if found:
            return Path(found)
        logger.warning("wasm-pack not found on PATH")
        return Path("wasm-pack")

    def ensure_dependencies(self) -> None:
        project_dir = self.settings.project_dir
        if not wranglerjs.is_installed(project_dir, self.settings.tool_name):
            logger.info("%s is missing; installing", self.settings.tool_name)
            installer.install(
                self.settings.tool_name,
                cwd=project_dir,
                package_manager=self.settings.package_manager
            )
        elif self.settings.npm_install:
            installer.run_npm_install(
                cwd=project_dir,
                package_manager=self.settings.package_manager
            )

    def run(self, skip_install: bool = False) -> BuildSummary:
        if not skip_install:
            self.ensure_dependencies()

        wasm_pack_path = self.resolve_wasm_pack_path()
        result = wranglerjs.run_build(
            wasm_pack_path, self.bundle, tool_name=self.settings.tool_name
        )
        return self.bundle.write(result)
