import json
import subprocess
import pytest
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Worker project with a package.json and no webpack config."""
    project = temp_dir / "project"
    project.mkdir()
    (project / "package.json").write_text(json.dumps({
        "name": "my-worker",
        "version": "1.0.0",
        "main": "index.js"
    }))
    (project / "index.js").write_text("addEventListener('fetch', () => {})\n")
    return project


@pytest.fixture
def dist_dir(temp_dir: Path) -> Path:
    """webpack dist directory left behind by wrangler-js."""
    dist = temp_dir / "dist"
    dist.mkdir()
    (dist / "main.js").write_text("console.log(1)")
    return dist


@pytest.fixture
def script_output(dist_dir: Path) -> Dict[str, Any]:
    """wrangler-js result for a script-only worker."""
    return {
        "wasm": None,
        "wasm_name": "x",
        "script": "console.log(1)",
        "dist_to_clean": str(dist_dir),
        "wasm_size": 0,
        "script_size": 14.0
    }


@pytest.fixture
def wasm_output(dist_dir: Path) -> Dict[str, Any]:
    """wrangler-js result for a worker with a wasm module."""
    return {
        "wasm": "\u0000asm\u0001\u0000\u0000\u0000",
        "wasm_name": "4b1e9a.module.wasm",
        "script": "fetch('4b1e9a.module.wasm').then(r => r.arrayBuffer())",
        "dist_to_clean": str(dist_dir),
        "wasm_size": 123456.0,
        "script_size": 2048.0
    }


@pytest.fixture
def fake_wranglerjs() -> Callable[..., Callable[..., subprocess.CompletedProcess]]:
    """Build a subprocess.run replacement that behaves like wrangler-js.

    The replacement records every call in ``calls`` and writes ``output``
    (a dict is serialized as JSON, bytes are written as is) to the
    --output-file path. With ``remove_output`` it deletes that file instead.
    """
    def factory(
        output: Optional[Any] = None,
        returncode: int = 0,
        calls: Optional[List[Dict[str, Any]]] = None,
        remove_output: bool = False
    ) -> Callable[..., subprocess.CompletedProcess]:
        def run(command, **kwargs):
            if calls is not None:
                calls.append({"command": list(command), **kwargs})
            output_file = next(
                arg.split("=", 1)[1]
                for arg in command
                if arg.startswith("--output-file=")
            )
            if remove_output:
                Path(output_file).unlink()
            elif isinstance(output, bytes):
                Path(output_file).write_bytes(output)
            elif output is not None:
                text = output if isinstance(output, str) else json.dumps(output)
                Path(output_file).write_text(text)
            return subprocess.CompletedProcess(command, returncode)
        return run
    return factory
