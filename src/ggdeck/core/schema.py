"""
Pydantic v2 models for observation input rows and summary output rows.

Responsibilities
- Define ObservationRecord (one measurement row) and SummaryRecord (one
  per-subject, per-condition-group aggregate).
- Reject non-numeric correlation values before any arithmetic happens.
- Convert Pydantic validation failures into core InputError at the seam used by
  the pipeline (``observation_from_value``).

Style
- Zero-IO (stdlib + pydantic only).
- Field names match the column names in ggdeck.core.tables descriptors.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InputError

__all__ = [
    "ObservationRecord",
    "SummaryRecord",
    "observation_from_value",
]


class ObservationRecord(BaseModel):
    """
    One measurement row of the raw correlation dataset.

    Attributes:
        region (str): Region-of-interest label (e.g., "SC").
        parameter (str): Model/signal family the correlations belong to (e.g., "flynet").
        stimulus_type (str): Experimental condition label (e.g., "ring_expand").
        subject_id (str): Subject identifier; integer ids are stringified.
        correlation_by_condition (float): Correlation computed within the condition.
        correlation_overall (float): Correlation computed across all conditions.

    Raises:
        pydantic.ValidationError: If a field is missing, or a correlation is a
            string, boolean, or otherwise non-numeric.

    Notes:
        Extra columns carried by raw datasets are ignored.

    Examples:
        >>> from ggdeck.core.schema import ObservationRecord
        >>> r = ObservationRecord(
        ...     region="SC", parameter="flynet", stimulus_type="ring_expand",
        ...     subject_id=7, correlation_by_condition=0.5, correlation_overall=0.3,
        ... )
        >>> r.subject_id
        '7'
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    region: str
    parameter: str
    stimulus_type: str
    subject_id: str
    correlation_by_condition: float
    correlation_overall: float

    @field_validator("subject_id", mode="before")
    @classmethod
    def _stringify_subject(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("correlation_by_condition", "correlation_overall", mode="before")
    @classmethod
    def _require_number(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, Real):
            raise ValueError(f"expected a number, got {type(v).__name__}")
        return float(v)

    @property
    def difference(self) -> float:
        """correlation_by_condition - correlation_overall"""
        return self.correlation_by_condition - self.correlation_overall


class SummaryRecord(BaseModel):
    """
    Aggregated difference for one (subject, condition group) pair.

    Attributes:
        subject_id (str): Subject identifier.
        is_target_condition (bool): True for rows whose stimulus_type equals the
            designated target stimulus.
        difference_metric (float): Unweighted mean of
            (correlation_by_condition - correlation_overall) over the group.

    Notes:
        Frozen; summaries are derived once and never mutated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    subject_id: str
    is_target_condition: bool
    difference_metric: float


def observation_from_value(
    value: ObservationRecord | Mapping[str, Any], *, index: int
) -> ObservationRecord:
    """
    Coerce a row into an ObservationRecord, raising InputError on failure.

    Args:
        value: An ObservationRecord (returned as-is) or a mapping of field values.
        index: Position of the row in the caller's sequence, used in the message.

    Raises:
        InputError: If the mapping is missing a required field or a correlation
            value is non-numeric.
    """
    if isinstance(value, ObservationRecord):
        return value
    if not isinstance(value, Mapping):
        raise InputError(f"row {index}: expected a mapping, got {type(value).__name__}")
    try:
        return ObservationRecord.model_validate(dict(value))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InputError(f"row {index}: {problems}") from exc
