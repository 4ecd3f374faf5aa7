"""elm_torture

Core package namespace for the conformance runner.

Why this exists
---------------
The runner itself lives in the top-level ``pipeline`` (orchestration and
subprocess side effects) and ``cli`` (argument parsing, reporting) packages.
This package owns what both of them have to agree on:

* domain types (stage errors, suite outcomes, exit codes)
* IO/layout rules (the on-disk suite contract, atomic writers, the harness
  driver asset)

Keeping these here lets the CLI and the pipeline stay thin composition roots
over a shared vocabulary.
"""

from __future__ import annotations
