"""package.json reader used to infer the build entry point."""
import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from ..builders.errors import ManifestError


class Package(BaseModel):
    """The subset of package.json the build cares about."""
    main: str
    name: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def load(cls, project_dir: Path) -> "Package":
        """Read and validate ``<project_dir>/package.json``."""
        manifest_path = project_dir / "package.json"
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ManifestError(f"package.json not found in {project_dir}") from e
        except (OSError, ValueError) as e:
            raise ManifestError(f"could not read {manifest_path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ManifestError(
                f"{manifest_path} does not declare a `main` entry: {e}"
            ) from e

    def entry_path(self, project_dir: Path) -> Path:
        """Absolute path of the declared main file."""
        return project_dir.resolve() / self.main
