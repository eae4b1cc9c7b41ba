import json
from pathlib import Path

import pytest

from worker_bundler.builders.build_result import BuildResult
from worker_bundler.builders.bundle import Bundle
from worker_bundler.builders.errors import CleanupFailedError
from worker_bundler.builders.prologue import (
    create_metadata,
    create_prologue,
    create_wasm_prologue,
)


class TestBundle:
    @pytest.fixture
    def bundle(self, project_dir: Path) -> Bundle:
        return Bundle(project_dir=project_dir)

    def test_paths(self, bundle: Bundle, project_dir: Path):
        """Bundle files live in the fixed worker directory."""
        assert bundle.out_dir == project_dir / "worker"
        assert bundle.metadata_path == project_dir / "worker" / "metadata.json"
        assert bundle.wasm_path == project_dir / "worker" / "module.wasm"
        assert bundle.script_path == project_dir / "worker" / "script.js"

    def test_has_webpack_config(self, bundle: Bundle, project_dir: Path):
        assert not bundle.has_webpack_config()
        (project_dir / "webpack.config.js").write_text("module.exports = {}")
        assert bundle.has_webpack_config()

    def test_ensure_out_dir_is_lazy(self, bundle: Bundle):
        assert not bundle.out_dir.exists()
        bundle.ensure_out_dir()
        bundle.ensure_out_dir()
        assert bundle.out_dir.is_dir()

    def test_write_script_only(self, bundle: Bundle, script_output, dist_dir: Path, capsys):
        """A script-only build writes no wasm and no binding."""
        result = BuildResult(**script_output)

        summary = bundle.write(result)

        assert json.loads(bundle.metadata_path.read_text()) == {"body_part": "script"}
        assert not bundle.wasm_path.exists()

        script = bundle.script_path.read_text()
        assert script.startswith(create_prologue())
        assert script == create_prologue() + "console.log(1)"
        assert "oldFetch" not in script

        assert not dist_dir.exists()
        assert summary.wasm_path is None
        assert capsys.readouterr().out.strip() == "Sizes: script=14 bytes"

    def test_write_with_wasm(self, bundle: Bundle, wasm_output, dist_dir: Path, capsys):
        """A wasm build writes the module, a binding and the fetch shim."""
        result = BuildResult(**wasm_output)

        summary = bundle.write(result)

        metadata = json.loads(bundle.metadata_path.read_text())
        assert metadata == {
            "body_part": "script",
            "binding": {
                "name": "wasmprogram",
                "type": "wasm_module",
                "part": "wasmprogram"
            }
        }
        assert bundle.wasm_path.read_text(encoding="utf-8") == wasm_output["wasm"]

        script = bundle.script_path.read_text()
        wasm_prologue = create_wasm_prologue("4b1e9a.module.wasm", "wasmprogram")
        assert script == create_prologue() + wasm_prologue + wasm_output["script"]

        assert not dist_dir.exists()
        assert summary.wasm_path == bundle.wasm_path
        assert capsys.readouterr().out.strip() == "Sizes: wasm=123 kB script=2 kB"

    def test_stale_wasm_does_not_change_metadata(self, bundle: Bundle, script_output):
        """Metadata follows the build result, not leftovers on disk."""
        bundle.ensure_out_dir()
        bundle.wasm_path.write_text("old module")

        bundle.write(BuildResult(**script_output))

        assert "binding" not in json.loads(bundle.metadata_path.read_text())

    def test_cleanup_failure(self, bundle: Bundle, script_output, temp_dir: Path, capsys):
        """Outputs are written even when the dist directory cannot be removed."""
        script_output["dist_to_clean"] = str(temp_dir / "missing")
        result = BuildResult(**script_output)

        with pytest.raises(CleanupFailedError) as excinfo:
            bundle.write(result)

        assert excinfo.value.path == str(temp_dir / "missing")
        assert bundle.metadata_path.exists()
        assert bundle.script_path.exists()
        assert "Sizes" not in capsys.readouterr().out


class TestPrologue:
    def test_prologue_aliases_window(self):
        assert "const window = this;" in create_prologue()

    def test_wasm_prologue_substitutions(self):
        prologue = create_wasm_prologue("abc.wasm", "wasmprogram")

        assert 'if (name === "abc.wasm")' in prologue
        assert "return wasmprogram;" in prologue
        assert "return oldFetch(name);" in prologue
        assert "{name}" not in prologue

    def test_metadata_without_binding(self):
        assert json.loads(create_metadata()) == {"body_part": "script"}

    def test_metadata_with_binding(self):
        binding = json.loads(create_metadata("wasmprogram"))["binding"]
        assert binding["name"] == binding["part"] == "wasmprogram"
        assert binding["type"] == "wasm_module"
