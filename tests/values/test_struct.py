"""Tests for sassvars.values.struct."""

from __future__ import annotations

import pytest
import sass

from sassvars.errors import UnsupportedType
from sassvars.values import (
    BooleanValue,
    ColorValue,
    ListValue,
    MapValue,
    NullValue,
    NumberValue,
    Separator,
    StringValue,
    StructuredValue,
    structure,
)


def test_structure_scalars() -> None:
    assert structure(True) == BooleanValue(True)
    assert structure("bold") == StringValue("bold")
    assert structure(None) == NullValue()
    assert structure(None).to_dict() == {"type": "SassNull", "value": None}


def test_structure_number() -> None:
    value = structure(sass.SassNumber(10, "px"))

    assert value == NumberValue(10, "px")
    assert value.to_dict() == {"type": "SassNumber", "value": 10, "unit": "px"}
    assert structure(sass.SassNumber(0.5, "")).to_dict()["value"] == pytest.approx(0.5)


def test_structure_color() -> None:
    value = structure(sass.SassColor(12.6, 0.4, 254.5, 0.5))

    assert isinstance(value, ColorValue)
    assert (value.r, value.g, value.b) == (13, 0, 255)
    assert value.a == pytest.approx(0.5)
    assert value.hex == "#0d00ff"
    assert value.to_dict()["value"]["hex"] == "#0d00ff"


def test_structure_list_keeps_separator() -> None:
    comma = structure(sass.SassList(["a", "b"], sass.SASS_SEPARATOR_COMMA))
    space = structure(sass.SassList(["a", "b"], sass.SASS_SEPARATOR_SPACE))

    assert isinstance(comma, ListValue)
    assert comma.separator is Separator.COMMA
    assert space.separator is Separator.SPACE
    assert comma.to_dict() == {
        "type": "SassList",
        "value": [
            {"type": "SassString", "value": "a"},
            {"type": "SassString", "value": "b"},
        ],
        "separator": ",",
    }


def test_structure_map_serializes_keys() -> None:
    value = structure(
        sass.SassMap(
            {
                sass.SassNumber(1, "px"): sass.SassColor(0, 0, 0, 1),
                "name": "base",
            }
        )
    )

    assert isinstance(value, MapValue)
    assert list(value.mapping) == ["1px", "name"]
    assert value.mapping["1px"].to_dict()["value"]["hex"] == "#000000"
    assert value.to_plain()["name"] == "base"


def test_structure_is_idempotent() -> None:
    native = sass.SassMap(
        {
            "sizes": sass.SassList(
                [sass.SassNumber(1, "px"), sass.SassNumber(2, "px")],
                sass.SASS_SEPARATOR_SPACE,
            ),
            "color": sass.SassColor(1, 2, 3, 1),
        }
    )

    assert structure(native) == structure(native)
    assert structure(native).to_dict() == structure(native).to_dict()


def test_structure_rejects_unknown_types() -> None:
    with pytest.raises(UnsupportedType) as excinfo:
        structure(sass.SassList([object()], sass.SASS_SEPARATOR_SPACE))
    assert excinfo.value.type_name == "object"


def test_structured_value_requires_to_dict() -> None:
    class Incomplete(StructuredValue):
        pass

    with pytest.raises(TypeError):
        StructuredValue()
    with pytest.raises(TypeError):
        Incomplete()
