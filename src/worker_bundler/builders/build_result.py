import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import MalformedOutputError


class BuildResult(BaseModel):
    """Result of a wrangler-js run, as written to its --output-file.

    Field names are the wire format shared with wrangler-js and must not change.
    """
    model_config = ConfigDict(frozen=True)

    wasm: Optional[str] = None
    wasm_name: str
    script: str
    # webpack dist directory; removed once the bundle has been written
    dist_to_clean: str
    wasm_size: float
    script_size: float

    @property
    def has_wasm(self) -> bool:
        return self.wasm is not None

    @classmethod
    def parse_output(cls, output: str) -> "BuildResult":
        """Parse the raw result file contents."""
        try:
            return cls.model_validate(json.loads(output))
        except (ValueError, ValidationError) as e:
            raise MalformedOutputError(
                f"could not parse wranglerjs output: {e}"
            ) from e
