import polars as pl
import pytest

from ggdeck.core.errors import InputError
from ggdeck.core.tables import OBSERVATIONS_DESC, SUMMARY_DESC
from ggdeck.io.errors import IoSchemaError
from ggdeck.io.validate import check_columns, validate_frame


def _obs(**cols):
    base = {
        "region": ["SC", "SC"],
        "parameter": ["flynet", "flynet"],
        "stimulus_type": ["ring_expand", "grating"],
        "subject_id": [1, 2],
        "correlation_by_condition": [1, 0],
        "correlation_overall": [0.5, 0.25],
    }
    base.update(cols)
    return pl.DataFrame(base)


def test_casts_ids_to_str_and_ints_to_float() -> None:
    out = validate_frame(_obs(), OBSERVATIONS_DESC)
    assert out.schema["subject_id"] == pl.Utf8
    assert out.schema["correlation_by_condition"] == pl.Float64
    assert out["subject_id"].to_list() == ["1", "2"]


def test_numeric_text_is_parsed() -> None:
    out = validate_frame(_obs(correlation_overall=["0.5", " 0.25 "]), OBSERVATIONS_DESC)
    assert out["correlation_overall"].to_list() == [0.5, 0.25]


def test_non_numeric_text_raises_input_error() -> None:
    with pytest.raises(InputError) as ei:
        validate_frame(_obs(correlation_overall=["0.5", "n/a"]), OBSERVATIONS_DESC)
    assert isinstance(ei.value, IoSchemaError)
    assert "non-numeric" in str(ei.value)


def test_boolean_correlation_rejected() -> None:
    with pytest.raises(IoSchemaError):
        validate_frame(_obs(correlation_overall=[True, False]), OBSERVATIONS_DESC)


def test_nulls_in_required_columns_raise() -> None:
    with pytest.raises(IoSchemaError) as ei:
        validate_frame(_obs(stimulus_type=["ring_expand", None]), OBSERVATIONS_DESC)
    assert "stimulus_type" in str(ei.value)


def test_missing_column_raises_for_lazy_and_eager() -> None:
    df = _obs().drop("correlation_overall")
    with pytest.raises(IoSchemaError):
        check_columns(df, OBSERVATIONS_DESC)
    with pytest.raises(IoSchemaError):
        check_columns(df.lazy(), OBSERVATIONS_DESC)


def test_summary_requires_boolean_flag() -> None:
    df = pl.DataFrame(
        {"subject_id": ["S1"], "is_target_condition": ["yes"], "difference_metric": [0.1]}
    )
    with pytest.raises(IoSchemaError):
        validate_frame(df, SUMMARY_DESC)
