"""
Core contracts for ggdeck (errors, constants, record models, tables, hashing, versioning).

## Contracts (single source of truth)
- Schemas — ObservationRecord / SummaryRecord Pydantic models.
- Tables — descriptors ggdeck.io validates frames against.
- Errors — InputError, EmptyResultWarning, VersionMismatch.
- Hashing — canonical JSON used in run manifests.
- Versioning — SCHEMA_V embedded in written artifacts.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Column and field names are lower_snake and identical across models and descriptors.

## Downstream usage
- ggdeck.io — validates frames using `tables`, tags artifacts with `versioning`.
- ggdeck.prep — raises `errors` and returns `schema.SummaryRecord` sequences.
- ggdeck.viz — consumes SummaryRecord sequences.
"""
