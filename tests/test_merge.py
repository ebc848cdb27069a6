from __future__ import annotations

from typing import Dict, List, Tuple

from sassvars.merge import merge, merge_value, to_payload
from sassvars.models import (
    CapturedValue,
    Declaration,
    DeclarationFlags,
    FileExtraction,
    Position,
)
from sassvars.values.struct import NumberValue


def _captured(name: str, value: int, *, default: bool = False, line: int = 1) -> CapturedValue:
    declaration = Declaration(
        name=name,
        expression=str(value),
        flags=DeclarationFlags(default=default),
        position=Position(line=line, column=1, cursor=0),
    )
    return CapturedValue(declaration=declaration, value=NumberValue(value))


def _extractions(
    files: List[Tuple[str, List[CapturedValue]]]
) -> Tuple[List[str], Dict[str, FileExtraction]]:
    extractions: Dict[str, FileExtraction] = {}
    for filename, captured in files:
        extraction = FileExtraction(
            source_file=filename,
            declarations=[item.declaration for item in captured],
            injected_source="",
        )
        extraction.slots.update(enumerate(captured))
        extractions[filename] = extraction
    return [filename for filename, _ in files], extractions


def test_default_never_overrides_a_real_value() -> None:
    ordered, extractions = _extractions(
        [
            ("/p/a.scss", [_captured("$x", 1, default=True)]),
            ("/p/b.scss", [_captured("$x", 2)]),
            ("/p/c.scss", [_captured("$x", 3, default=True)]),
        ]
    )

    variables = merge(ordered, extractions)

    assert variables["$x"].value == NumberValue(2)
    assert variables["$x"].sources == ("/p/a.scss", "/p/b.scss", "/p/c.scss")
    assert len(variables["$x"].declarations) == 3


def test_defaults_replace_each_other_when_no_real_value_exists() -> None:
    ordered, extractions = _extractions(
        [
            ("/p/a.scss", [_captured("$x", 1, default=True)]),
            ("/p/b.scss", [_captured("$x", 2, default=True)]),
        ]
    )

    assert merge(ordered, extractions)["$x"].value == NumberValue(2)


def test_later_real_declarations_win() -> None:
    ordered, extractions = _extractions(
        [
            ("/p/a.scss", [_captured("$x", 1)]),
            ("/p/b.scss", [_captured("$x", 2)]),
        ]
    )

    assert merge(ordered, extractions)["$x"].value == NumberValue(2)


def test_sources_are_unique_but_declarations_are_kept() -> None:
    ordered, extractions = _extractions(
        [("/p/a.scss", [_captured("$x", 1, line=1), _captured("$x", 2, line=2)])]
    )

    variable = merge(ordered, extractions)["$x"]

    assert variable.sources == ("/p/a.scss",)
    assert [site.position.line for site in variable.declarations] == [1, 2]
    assert variable.value == NumberValue(2)


def test_merge_value_does_not_mutate_its_input() -> None:
    first = merge_value(None, "/p/a.scss", _captured("$x", 1))
    second = merge_value(first, "/p/b.scss", _captured("$x", 2))

    assert first.value == NumberValue(1)
    assert first.sources == ("/p/a.scss",)
    assert second.sources == ("/p/a.scss", "/p/b.scss")


def test_to_payload_renders_provenance() -> None:
    ordered, extractions = _extractions(
        [("/p/a.scss", [_captured("$gap", 4, default=True)])]
    )

    payload = to_payload(merge(ordered, extractions))

    assert payload == {
        "global": {
            "$gap": {
                "type": "SassNumber",
                "value": 4,
                "unit": "",
                "sources": ["/p/a.scss"],
                "declarations": [
                    {
                        "expression": "4",
                        "flags": {"default": True, "global": False},
                        "in": "/p/a.scss",
                        "position": {"line": 1, "column": 1, "cursor": 0},
                    }
                ],
            }
        }
    }
