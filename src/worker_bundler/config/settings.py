# config/settings.py
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""
    # Project Paths
    project_dir: Path = Field(default=Path("."))
    out_dir: Path = Field(default=Path("worker"))
    log_dir: Path = Field(default=Path("logs"))
    webpack_config: str = Field(default="webpack.config.js")

    # Tooling
    tool_name: str = Field(default="wrangler-js")
    package_manager: str = Field(default="npm")
    wasm_pack_path: Optional[Path] = None  # looked up on PATH when unset

    # Bundle Configuration
    wasm_binding: str = Field(default="wasmprogram")
    npm_install: bool = Field(default=False)  # run `npm install` before each build

    class Config:
        env_file = ".env"
        env_prefix = "WORKER_BUNDLER_"

    def bundle_out_dir(self) -> Path:
        """Output directory, relative paths resolved against the project."""
        if self.out_dir.is_absolute():
            return self.out_dir
        return self.project_dir / self.out_dir


# Create global settings instance
settings = Settings()
