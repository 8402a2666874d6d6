"""
ggdeck core defaults.

Defines the filter defaults used by the workshop example plot and the artifact
compression default consumed by ggdeck.io. Zero-IO; stdlib only.

Notes:
    - The example slides plot the superior colliculus ("SC") under the "flynet"
      model parameter, contrasting the expanding-ring stimulus with all others.
    - Changing these values changes which artifact the deck renders.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_REGION",
    "DEFAULT_PARAMETER",
    "DEFAULT_TARGET_STIMULUS",
    "COMPRESSION",
    "MANIFEST_SUFFIX",
]

DEFAULT_REGION: str = "SC"

DEFAULT_PARAMETER: str = "flynet"

DEFAULT_TARGET_STIMULUS: str = "ring_expand"

# Parquet codec for summary artifacts.
COMPRESSION: str = "zstd"

# Manifest sits next to the artifact: <artifact>.manifest.json
MANIFEST_SUFFIX: str = ".manifest.json"
