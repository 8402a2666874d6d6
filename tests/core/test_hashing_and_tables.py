from ggdeck.core.hashing import hash_params, json_dumps_canonical, sha256_hexdigest
from ggdeck.core.tables import TableName, get_table, list_tables
from ggdeck.core.versioning import SCHEMA_V


def test_json_dumps_canonical_sorted_and_unicode() -> None:
    s1 = json_dumps_canonical({"b": 2, "a": 1, "label": "Δ"})
    s2 = json_dumps_canonical({"label": "Δ", "a": 1, "b": 2})
    assert s1 == s2
    assert "Δ" in s1


def test_hash_params_order_invariant() -> None:
    assert hash_params({"region": "SC", "parameter": "flynet"}) == hash_params(
        {"parameter": "flynet", "region": "SC"}
    )
    assert sha256_hexdigest("abc") == sha256_hexdigest(b"abc")


def test_descriptors_contract() -> None:
    for desc in list_tables():
        assert set(desc.required).issubset(desc.columns.keys())
        assert set(desc.columns.values()) <= {"str", "f64", "bool"}
        assert desc.version == SCHEMA_V


def test_get_table_roundtrip() -> None:
    for name in TableName:
        assert get_table(name).name == name
    obs = get_table(TableName.OBSERVATIONS)
    assert obs.columns_of("f64") == ["correlation_by_condition", "correlation_overall"]
