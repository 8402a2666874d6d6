"""
ggdeck — example data and charts for a grammar-of-graphics workshop deck.

## Layers
- ggdeck.core — record models, table descriptors, errors, versioning (zero-IO).
- ggdeck.io — settings, readers, validation, atomic artifact writers.
- ggdeck.prep — the filter/derive/group/aggregate preparer and the CLI.
- ggdeck.viz — layered Altair chart over the prepared summary.

## Examples
```python
from ggdeck.prep import prepare_example_data
rows = [
    {"region": "SC", "parameter": "flynet", "stimulus_type": "ring_expand",
     "subject_id": "S1", "correlation_by_condition": 0.5, "correlation_overall": 0.3},
]
prepare_example_data(rows, "SC", "flynet", "ring_expand")
```
"""

__version__ = "0.1.0"
