"""Code injected at the top level of the worker script and its metadata."""
import json
from typing import Optional

# Gives code written for browsers a `window` global.
PROLOGUE = """
const window = this;
"""

# webpack loads wasm through fetch(); serve the module from its binding instead.
WASM_PROLOGUE = """
const oldFetch = fetch;
function fetch(name) {{
  if (name === "{name}") {{
    return Promise.resolve({{
      arrayBuffer() {{
        return {binding}; // defined in bindings
      }}
    }});
  }}
  return oldFetch(name);
}}
"""


def create_prologue() -> str:
    return PROLOGUE


def create_wasm_prologue(name: str, binding: str) -> str:
    return WASM_PROLOGUE.format(name=name, binding=binding)


def create_metadata(wasm_binding: Optional[str] = None) -> str:
    """Describe the bindings of the worker; no binding means script only."""
    metadata = {"body_part": "script"}
    if wasm_binding is not None:
        metadata["binding"] = {
            "name": wasm_binding,
            "type": "wasm_module",
            "part": wasm_binding,
        }
    return json.dumps(metadata)
