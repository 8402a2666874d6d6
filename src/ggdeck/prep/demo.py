"""
Deterministic synthetic observation table for the workshop examples.

The deck ships without the original recordings; ``make_demo_observations`` builds a
small table with the same columns so every example can run offline. Values come
from seeded SHA-256 hashes, so a given (n_subjects, seed, repeats) always produces
the same rows.
"""

from __future__ import annotations

import hashlib
from typing import Any

import polars as pl

from ggdeck.core.constants import DEFAULT_PARAMETER, DEFAULT_REGION, DEFAULT_TARGET_STIMULUS

REGIONS = (DEFAULT_REGION, "LGN")
PARAMETERS = (DEFAULT_PARAMETER, "motion_energy")
STIMULI = (DEFAULT_TARGET_STIMULUS, "ring_contract", "grating")

# Extra by-condition correlation for the target stimulus in the default region/parameter.
TARGET_EFFECT = 0.15


def _seeded_unit(key: str, seed: int) -> float:
    raw = f"{seed}|{key}".encode()
    h = hashlib.sha256(raw).hexdigest()
    # Map to [0, 1)
    return int(h[:8], 16) / 0x100000000


def _clip(x: float) -> float:
    return max(-1.0, min(1.0, x))


def make_demo_observations(n_subjects: int = 6, seed: int = 123, repeats: int = 2) -> pl.DataFrame:
    """
    Build a demo observation table.

    Args:
        n_subjects: Number of subjects ("S1" .. "S<n>").
        seed: Hash seed; change it to get a different but equally stable table.
        repeats: Repeated measurements per (subject, region, parameter, stimulus) cell.

    Returns:
        pl.DataFrame: Columns region, parameter, stimulus_type, subject_id,
        correlation_by_condition, correlation_overall, repeat. Correlations lie in [-1, 1].

    Raises:
        ValueError: If n_subjects or repeats is < 1.
    """
    if n_subjects < 1 or repeats < 1:
        raise ValueError("n_subjects and repeats must both be >= 1")

    rows: list[dict[str, Any]] = []
    for s in range(1, n_subjects + 1):
        subject = f"S{s}"
        for region in REGIONS:
            for parameter in PARAMETERS:
                for stimulus in STIMULI:
                    for rep in range(repeats):
                        key = f"{subject}|{region}|{parameter}|{stimulus}|{rep}"
                        overall = 0.6 * _seeded_unit(key + "|overall", seed) - 0.1
                        noise = 0.2 * _seeded_unit(key + "|noise", seed) - 0.1
                        effect = (
                            TARGET_EFFECT
                            if (region, parameter, stimulus)
                            == (DEFAULT_REGION, DEFAULT_PARAMETER, DEFAULT_TARGET_STIMULUS)
                            else 0.0
                        )
                        rows.append(
                            {
                                "region": region,
                                "parameter": parameter,
                                "stimulus_type": stimulus,
                                "subject_id": subject,
                                "correlation_by_condition": round(
                                    _clip(overall + effect + noise), 4
                                ),
                                "correlation_overall": round(_clip(overall), 4),
                                "repeat": rep,
                            }
                        )
    return pl.DataFrame(
        rows,
        schema={
            "region": pl.Utf8,
            "parameter": pl.Utf8,
            "stimulus_type": pl.Utf8,
            "subject_id": pl.Utf8,
            "correlation_by_condition": pl.Float64,
            "correlation_overall": pl.Float64,
            "repeat": pl.Int64,
        },
    )
