"""pipeline.execution.harness

Synthesis of the JavaScript harness that runs a compiled suite.

The generated ``harness.js`` has four parts:

1. load the compiled artifact (``./elm.js``)
2. bind ``expectedOutput`` by re-parsing the suite's ``output.json`` text
3. the fixed driver template (``elm_torture/assets/run.js``)
4. call the driver with both

Embedding strategy
------------------
The expected output is embedded verbatim inside ``String.raw`...``` so that
JSON escapes (``\\"``, ``\\\\``, ``\\n``) reach ``JSON.parse`` untouched. A raw
template literal cannot hold a backtick or ``${`` though, so for such texts we
fall back to a JSON-encoded string literal, which is also a valid JavaScript
string literal. Both forms re-parse to exactly the original text.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources

from elm_torture.io.layout import COMPILED_ARTIFACT

DRIVER_TEMPLATE_RESOURCE = "assets/run.js"


@lru_cache(maxsize=1)
def load_driver_template() -> str:
    """Return the harness driver shipped with the package."""
    return resources.files("elm_torture").joinpath(DRIVER_TEMPLATE_RESOURCE).read_text(encoding="utf-8")


def can_embed_raw(text: str) -> bool:
    return "`" not in text and "${" not in text and not text.endswith("\\")


def js_string_literal(text: str) -> str:
    """Return a JavaScript expression evaluating to exactly ``text``."""
    if can_embed_raw(text):
        return f"String.raw`{text}`"
    return json.dumps(text, ensure_ascii=True)


def render_harness(expected_output: str, *, driver: str | None = None) -> str:
    template = load_driver_template() if driver is None else driver
    return (
        "\n"
        f"const {{ Elm }} = require('./{COMPILED_ARTIFACT}');\n"
        f"const expectedOutput = JSON.parse({js_string_literal(expected_output)});\n"
        f"{template}\n"
        "\n"
        "module.exports(Elm, expectedOutput);\n"
    )
