from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import altair as alt
import polars as pl
import pytest

from ggdeck.core.schema import SummaryRecord
from ggdeck.viz import charts, save


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


def mark_type(d: dict) -> str | None:
    mark = d.get("mark")
    if isinstance(mark, dict):
        return mark.get("type")
    return mark


RECORDS = [
    SummaryRecord(subject_id="S1", is_target_condition=True, difference_metric=0.2),
    SummaryRecord(subject_id="S1", is_target_condition=False, difference_metric=-0.05),
    SummaryRecord(subject_id="S2", is_target_condition=True, difference_metric=0.1),
]


def test_to_values_labels_conditions() -> None:
    vals = charts.to_values(RECORDS, target_label="ring", other_label="rest")
    assert [v["condition"] for v in vals] == ["ring", "rest", "ring"]
    frame = pl.DataFrame([r.model_dump() for r in RECORDS])
    assert charts.to_values(frame) == charts.to_values(RECORDS)


def test_difference_chart_layers() -> None:
    spec = charts.difference_chart(RECORDS).to_dict()

    assert "layer" in spec
    assert len(spec["layer"]) == 4
    assert find_in_spec(spec, lambda d: mark_type(d) == "circle" and "color" in d["encoding"])
    assert find_in_spec(spec, lambda d: mark_type(d) == "line" and "detail" in d["encoding"])
    assert find_in_spec(spec, lambda d: mark_type(d) == "rule")
    assert find_in_spec(
        spec,
        lambda d: d.get("field") == "difference_metric" and d.get("aggregate") == "mean",
    )


def test_difference_chart_empty_placeholder() -> None:
    spec = charts.difference_chart([]).to_dict()
    assert find_in_spec(spec, lambda d: mark_type(d) == "text")


def test_save_html_without_converter_and_image_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    vals = [{"x": 0, "y": 0}, {"x": 1, "y": 1}]
    ch = alt.Chart(alt.Data(values=vals)).mark_line().encode(x="x:Q", y="y:Q")

    out_html = tmp_path / "report.html"
    assert save.save(ch, out_html=str(out_html)) == [str(out_html)]
    assert out_html.exists() and out_html.stat().st_size > 0

    real_import_module = importlib.import_module

    def fake_import_module(name: str, *args, **kwargs):
        if name == "vl_convert":
            raise ImportError("simulated missing converter")
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(importlib, "import_module", fake_import_module)
    with pytest.raises(RuntimeError) as ei:
        save.save(ch, out_png=str(tmp_path / "report.png"))
    assert "vl-convert-python" in str(ei.value)
