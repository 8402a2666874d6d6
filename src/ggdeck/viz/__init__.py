"""
ggdeck.viz — read-only example chart over summary artifacts.

## Public API
- charts.difference_chart — layered Altair chart for SummaryRecord sequences.
- save.save — HTML/PNG export.

## Import DAG discipline
- Depends on ggdeck.core (SummaryRecord), polars, altair.
- Never writes artifacts or manifests.
"""
