import pytest
from pydantic import ValidationError

from ggdeck.core.errors import InputError
from ggdeck.core.schema import ObservationRecord, SummaryRecord, observation_from_value


def _row(**overrides):
    row = {
        "region": "SC",
        "parameter": "flynet",
        "stimulus_type": "ring_expand",
        "subject_id": "S1",
        "correlation_by_condition": 0.5,
        "correlation_overall": 0.3,
    }
    row.update(overrides)
    return row


def test_observation_accepts_ints_and_ignores_extras() -> None:
    r = ObservationRecord.model_validate(_row(subject_id=7, correlation_overall=0, extra="x"))
    assert r.subject_id == "7"
    assert r.correlation_overall == 0.0
    assert r.difference == pytest.approx(0.5)


@pytest.mark.parametrize("bad", ["0.5", None, True, [0.5]])
def test_observation_rejects_non_numeric_correlations(bad) -> None:
    with pytest.raises(ValidationError):
        ObservationRecord.model_validate(_row(correlation_by_condition=bad))


def test_observation_from_value_reports_row_index() -> None:
    row = _row()
    del row["stimulus_type"]
    with pytest.raises(InputError) as ei:
        observation_from_value(row, index=4)
    assert "row 4" in str(ei.value)
    assert "stimulus_type" in str(ei.value)


def test_observation_from_value_passes_models_through() -> None:
    r = ObservationRecord.model_validate(_row())
    assert observation_from_value(r, index=0) is r


def test_observation_from_value_rejects_non_mapping() -> None:
    with pytest.raises(InputError):
        observation_from_value(["SC", "flynet"], index=0)  # type: ignore[arg-type]


def test_summary_record_is_frozen() -> None:
    s = SummaryRecord(subject_id="S1", is_target_condition=True, difference_metric=0.2)
    with pytest.raises(ValidationError):
        s.difference_metric = 0.3  # type: ignore[misc]
    with pytest.raises(ValidationError):
        SummaryRecord(subject_id="S1", is_target_condition=True, difference_metric=0.2, n=3)
