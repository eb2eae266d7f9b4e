"""Tests for PropertySpec and schema normalisation."""

from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from capsule.errors import SchemaDefect
from capsule.schema import UNSET, PropertySpec, normalize_schema
from tests.conftest import Person


class TestPropertySpec:
    def test_defaults(self) -> None:
        spec = PropertySpec()
        assert spec.type is None
        assert spec.default is UNSET
        assert spec.default_factory is None
        assert spec.has_default is False

    def test_default_value(self) -> None:
        spec = PropertySpec(type=bool, default=True)
        assert spec.has_default is True
        assert spec.make_default() is True

    def test_default_factory(self) -> None:
        spec = PropertySpec(type=list, default_factory=list)
        assert spec.has_default is True
        first = spec.make_default()
        assert first == []
        assert spec.make_default() is not first

    def test_both_defaults_rejected(self) -> None:
        with pytest.raises(SchemaDefect, match="either default or default_factory"):
            PropertySpec(type=list, default=[], default_factory=list)

    def test_factory_must_be_callable(self) -> None:
        with pytest.raises(SchemaDefect):
            PropertySpec(type=list, default_factory="list")

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(SchemaDefect):
            PropertySpec(type=str, defualt="x")

    def test_frozen(self) -> None:
        spec = PropertySpec(type=str)
        with pytest.raises(ValidationError):
            spec.type = int  # type: ignore[misc]

    def test_class_token_kept_as_is(self) -> None:
        assert PropertySpec(type=Person).type is Person

    def test_unset_survives_copy(self) -> None:
        assert copy.deepcopy(UNSET) is UNSET
        assert repr(UNSET) == "UNSET"


class TestNormalizeSchema:
    def test_bare_tokens(self) -> None:
        specs = normalize_schema({"name": str, "spouse": Person})
        assert specs["name"] == PropertySpec(type=str)
        assert specs["spouse"].type is Person

    def test_mapping_descriptors(self) -> None:
        specs = normalize_schema({"is_citizen": {"type": bool, "default": True}})
        assert specs["is_citizen"].default is True

    def test_spec_passthrough(self) -> None:
        spec = PropertySpec(type=str, default="x")
        assert normalize_schema({"name": spec})["name"] is spec

    def test_preserves_order(self) -> None:
        specs = normalize_schema({"c": str, "a": str, "b": str})
        assert list(specs) == ["c", "a", "b"]

    def test_none_descriptor_is_wildcard(self) -> None:
        assert normalize_schema({"anything": None})["anything"].type is None

    @pytest.mark.parametrize("name", ["", "_hidden", "__dunder__"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(SchemaDefect):
            normalize_schema({name: str})

    def test_non_string_name(self) -> None:
        with pytest.raises(SchemaDefect, match="strings"):
            normalize_schema({1: str})  # type: ignore[dict-item]

    def test_reserved_name(self) -> None:
        with pytest.raises(SchemaDefect) as exc_info:
            normalize_schema({"get": str}, reserved=frozenset({"get"}))
        assert exc_info.value.name == "get"

    def test_unknown_descriptor_key(self) -> None:
        with pytest.raises(SchemaDefect, match="'name'"):
            normalize_schema({"name": {"kind": str}})

    def test_conflicting_defaults_in_mapping(self) -> None:
        with pytest.raises(SchemaDefect):
            normalize_schema({"tags": {"type": list, "default": [], "default_factory": list}})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(SchemaDefect, match="mapping"):
            normalize_schema([("name", str)])  # type: ignore[arg-type]
