"""
Example chart over summary records: one layered Altair chart.

The deck walks through the grammar of graphics one layer at a time; this module
builds the final figure from the same pieces:

- data: SummaryRecord rows (subject_id, is_target_condition, difference_metric)
- aesthetic mapping: condition → x and color, difference_metric → y
- geometric objects: per-subject lines and points, a per-condition mean marker
- statistical transform: mean aggregate for the marker
- a reference rule at y = 0
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import altair as alt
import polars as pl

from ggdeck.core.schema import SummaryRecord

__all__ = [
    "to_values",
    "layer_subject_lines",
    "layer_points",
    "layer_group_means",
    "layer_rule_y",
    "difference_chart",
]

_Y_TITLE = "Δ correlation (condition − overall)"


# Uniform chart defaults
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
        .configure_legend(labelFontSize=12, titleFontSize=12)
        .configure_title(fontSize=14)
        .configure_view(strokeOpacity=0)
    )


def to_values(
    records: Sequence[SummaryRecord] | pl.DataFrame,
    *,
    target_label: str = "target",
    other_label: str = "other",
) -> list[dict[str, Any]]:
    """
    Convert summary records to inline Vega-Lite values with a "condition" label column.

    Args:
        records: SummaryRecord models or a summary frame.
        target_label: Label for rows with is_target_condition True.
        other_label: Label for the remaining rows.
    """
    if isinstance(records, pl.DataFrame):
        rows = records.select("subject_id", "is_target_condition", "difference_metric").to_dicts()
    else:
        rows = [r.model_dump() for r in records]
    for row in rows:
        row["condition"] = target_label if row["is_target_condition"] else other_label
    return rows


# ----------------------------
# Layers
# ----------------------------


def layer_subject_lines(values: list[dict[str, Any]], *, sort: list[str]) -> alt.Chart:
    """Thin grey line per subject joining its two condition groups."""
    return (
        alt.Chart(alt.Data(values=values))
        .mark_line(color="#bbb", strokeWidth=1)
        .encode(
            x=alt.X("condition:N", sort=sort, title=None),
            y=alt.Y("difference_metric:Q", title=_Y_TITLE),
            detail="subject_id:N",
        )
    )


def layer_points(values: list[dict[str, Any]], *, sort: list[str], size: int = 60) -> alt.Chart:
    """One point per summary record, colored by condition."""
    return (
        alt.Chart(alt.Data(values=values))
        .mark_circle(size=size, opacity=0.8)
        .encode(
            x=alt.X("condition:N", sort=sort, title=None),
            y=alt.Y("difference_metric:Q", title=_Y_TITLE),
            color=alt.Color("condition:N", sort=sort, title="Condition"),
            tooltip=[
                "subject_id:N",
                "condition:N",
                alt.Tooltip("difference_metric:Q", format=".3f"),
            ],
        )
    )


def layer_group_means(values: list[dict[str, Any]], *, sort: list[str]) -> alt.Chart:
    """Per-condition mean marker (aggregate computed by Vega-Lite)."""
    return (
        alt.Chart(alt.Data(values=values))
        .mark_point(shape="diamond", size=160, filled=True, color="black")
        .encode(
            x=alt.X("condition:N", sort=sort, title=None),
            y=alt.Y("mean(difference_metric):Q", title=_Y_TITLE),
        )
    )


def layer_rule_y(y: float, *, color: str = "#999") -> alt.Chart:
    """Horizontal reference rule at y."""
    return alt.Chart(alt.Data(values=[{"y": float(y)}])).mark_rule(color=color).encode(y="y:Q")


def difference_chart(
    records: Sequence[SummaryRecord] | pl.DataFrame,
    *,
    target_label: str = "target",
    other_label: str = "other",
    title: str = "Condition-specific minus overall correlation",
) -> alt.TopLevelMixin:
    """
    Build the layered example chart for a set of summary records.

    Args:
        records: SummaryRecord models or a summary frame.
        target_label: x-axis label for the target condition group.
        other_label: x-axis label for the remaining conditions.
        title: Chart title.

    Returns:
        alt.TopLevelMixin: LayerChart (lines, points, means, zero rule), or a text
        placeholder chart when records is empty.
    """
    values = to_values(records, target_label=target_label, other_label=other_label)
    if not values:
        return _apply_chart_defaults(
            alt.Chart(alt.Data(values=[{"msg": "No summary records"}]))
            .mark_text()
            .encode(text="msg:N")
            .properties(title=title)
        )

    sort = [other_label, target_label]
    layered = alt.layer(
        layer_subject_lines(values, sort=sort),
        layer_points(values, sort=sort),
        layer_group_means(values, sort=sort),
        layer_rule_y(0.0),
    ).properties(title=title, width=240, height=320)
    return _apply_chart_defaults(layered)
