"""
ggdeck.prep — the example-data preparer and its command line.

## Public API
- prepare_example_data — records in, SummaryRecord list out.
- summarize_observations — the same pipeline over a Polars frame.
- prepare_file / prepare_frame — run the pipeline and persist artifact + manifest.
- make_demo_observations — deterministic synthetic input.

## Import DAG discipline
- Depends on ggdeck.core and ggdeck.io. Only the CLI imports ggdeck.viz.
"""

from __future__ import annotations

from .demo import make_demo_observations
from .pipeline import prepare_example_data, prepare_file, prepare_frame, summarize_observations

__all__ = [
    "prepare_example_data",
    "summarize_observations",
    "prepare_file",
    "prepare_frame",
    "make_demo_observations",
]
