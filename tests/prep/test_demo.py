import polars as pl
import pytest

from ggdeck.prep.demo import PARAMETERS, REGIONS, STIMULI, make_demo_observations
from ggdeck.prep.pipeline import summarize_observations


def test_demo_shape_and_ranges() -> None:
    df = make_demo_observations(n_subjects=3, repeats=2)
    assert df.height == 3 * len(REGIONS) * len(PARAMETERS) * len(STIMULI) * 2
    for col in ("correlation_by_condition", "correlation_overall"):
        assert df[col].min() >= -1.0
        assert df[col].max() <= 1.0


def test_demo_is_deterministic_per_seed() -> None:
    assert make_demo_observations(seed=7).equals(make_demo_observations(seed=7))
    assert not make_demo_observations(seed=7).equals(make_demo_observations(seed=8))


def test_demo_target_group_has_positive_mean_difference() -> None:
    out = summarize_observations(make_demo_observations(), "SC", "flynet", "ring_expand")
    means = out.group_by("is_target_condition").agg(pl.col("difference_metric").mean())
    by_flag = dict(means.iter_rows())
    assert by_flag[True] > by_flag[False]
    assert out.height == 12


def test_demo_rejects_bad_sizes() -> None:
    with pytest.raises(ValueError):
        make_demo_observations(n_subjects=0)
