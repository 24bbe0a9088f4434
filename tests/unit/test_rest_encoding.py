"""Firestore REST value encoding and write sentinel splitting."""

from datetime import datetime, timedelta, timezone

import pytest

from app.infrastructure.firebase._rest_encoding import (
    SERVER_TIMESTAMP,
    ArrayRemove,
    ArrayUnion,
    Increment,
    decode_document,
    encode_fields,
    leaf_field_paths,
    quote_field_path,
    split_transforms,
)


class TestEncodeFields:
    def test_scalars(self) -> None:
        fields = encode_fields({"n": 3, "f": 1.5, "b": True, "s": "x", "z": None})
        assert fields["n"] == {"integerValue": "3"}
        assert fields["f"] == {"doubleValue": 1.5}
        assert fields["b"] == {"booleanValue": True}
        assert fields["s"] == {"stringValue": "x"}
        assert fields["z"] == {"nullValue": None}

    def test_timestamp_is_converted_to_utc(self) -> None:
        local = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert encode_fields({"t": local})["t"] == {
            "timestampValue": "2024-05-01T12:00:00.000000Z"
        }

    def test_models_array_of_maps(self) -> None:
        fields = encode_fields({"models": ["A", {"name": "B", "contributorUid": "u1"}]})
        values = fields["models"]["arrayValue"]["values"]
        assert values[0] == {"stringValue": "A"}
        assert values[1]["mapValue"]["fields"]["name"] == {"stringValue": "B"}

    def test_nested_sentinel_rejected_inside_array(self) -> None:
        with pytest.raises(TypeError):
            encode_fields({"models": [SERVER_TIMESTAMP]})

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError, match="Unsupported"):
            encode_fields({"x": object()})


class TestDecodeDocument:
    def test_round_trip_of_stored_group(self) -> None:
        data = {
            "accessoryType": "Tempered Glass",
            "models": [{"name": "Galaxy S23"}, "Galaxy S23+"],
            "contributor": {"name": "Admin", "points": 0},
        }
        assert decode_document({"fields": encode_fields(data)}) == data

    def test_nanosecond_timestamp_is_truncated(self) -> None:
        doc = {"fields": {"t": {"timestampValue": "2024-05-01T12:00:00.123456789Z"}}}
        assert decode_document(doc)["t"] == datetime(
            2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc
        )

    def test_empty_array_and_missing_doc(self) -> None:
        assert decode_document({"fields": {"m": {"arrayValue": {}}}}) == {"m": []}
        assert decode_document(None) == {}


class TestSplitTransforms:
    def test_sentinels_become_transforms(self) -> None:
        plain, transforms = split_transforms({
            "status": "approved",
            "reviewedAt": SERVER_TIMESTAMP,
            "points": Increment(10),
            "models": ArrayUnion([{"name": "X"}]),
        })
        assert plain == {"status": "approved"}
        by_path = {t["fieldPath"]: t for t in transforms}
        assert by_path["reviewedAt"]["setToServerValue"] == "REQUEST_TIME"
        assert by_path["points"]["increment"] == {"integerValue": "10"}
        assert by_path["models"]["appendMissingElements"]["values"][0]["mapValue"]["fields"][
            "name"
        ] == {"stringValue": "X"}

    def test_nested_sentinel_uses_dotted_path(self) -> None:
        plain, transforms = split_transforms({"contributor": {"points": Increment(1)}})
        assert plain == {}
        assert transforms[0]["fieldPath"] == "contributor.points"

    def test_array_remove_becomes_remove_all(self) -> None:
        _, transforms = split_transforms({"models": ArrayRemove(["Pixel 8"])})
        assert transforms == [{
            "fieldPath": "models",
            "removeAllFromArray": {"values": [{"stringValue": "Pixel 8"}]},
        }]


def test_quote_field_path_backticks_non_identifiers() -> None:
    assert quote_field_path("accessoryType") == "accessoryType"
    assert quote_field_path("Galaxy S23") == "`Galaxy S23`"
    assert quote_field_path("a`b") == "`a\\`b`"


def test_leaf_field_paths_for_merge_mask() -> None:
    assert leaf_field_paths({"a": 1, "contributor": {"name": "x", "points": 0}}) == [
        "a",
        "contributor.name",
        "contributor.points",
    ]
