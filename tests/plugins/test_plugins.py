from __future__ import annotations

import pytest

from sassvars.plugins import (
    CompactPlugin,
    FilterPlugin,
    MinimalPlugin,
    Pluggable,
    Plugin,
    SerializePlugin,
    load_plugins,
)


def _payload():
    return {
        "global": {
            "$brand": {
                "type": "SassColor",
                "value": {"r": 255, "g": 0, "b": 0, "a": 1, "hex": "#ff0000"},
                "sources": ["/p/main.scss"],
                "declarations": [],
            },
            "$gaps": {
                "type": "SassList",
                "value": [
                    {"type": "SassNumber", "value": 4, "unit": "px"},
                    {"type": "SassNumber", "value": 8, "unit": "px"},
                ],
                "separator": ",",
                "sources": ["/p/main.scss"],
                "declarations": [],
            },
            "$sizes": {
                "type": "SassMap",
                "value": {"small": {"type": "SassNumber", "value": 1, "unit": "em"}},
                "sources": ["/p/main.scss"],
                "declarations": [],
            },
        }
    }


def test_load_plugins_accepts_names_mappings_and_instances() -> None:
    existing = CompactPlugin()

    plugins = load_plugins(
        [
            "serialize",
            {"plugin": "filter", "options": {"only": {"props": ["gaps"]}}},
            existing,
            MinimalPlugin,
        ]
    )

    assert isinstance(plugins[0], SerializePlugin)
    assert isinstance(plugins[1], FilterPlugin)
    assert plugins[1].only_props == {"$gaps"}
    assert plugins[2] is existing
    assert isinstance(plugins[3], MinimalPlugin)


def test_load_plugins_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown plugin requested: nope"):
        load_plugins(["nope"])


def test_load_plugins_rejects_unsupported_specs() -> None:
    with pytest.raises(TypeError):
        load_plugins([42])


def test_compact_plugin_strips_metadata_recursively() -> None:
    assert CompactPlugin().post_extract(_payload()) == {
        "global": {
            "$brand": {"r": 255, "g": 0, "b": 0, "a": 1, "hex": "#ff0000"},
            "$gaps": [4, 8],
            "$sizes": {"small": 1},
        }
    }


def test_filter_plugin_keeps_only_requested_types() -> None:
    plugin = FilterPlugin({"only": {"types": ["SassList", "map"]}})

    assert sorted(plugin.post_extract(_payload())["global"]) == ["$gaps", "$sizes"]


def test_filter_plugin_excludes_props() -> None:
    plugin = FilterPlugin({"except": {"props": ["$brand", "sizes"]}})

    assert sorted(plugin.post_extract(_payload())["global"]) == ["$gaps"]


def test_pluggable_runs_plugins_in_order() -> None:
    pluggable = Pluggable.from_specs(
        [{"plugin": "filter", "options": {"only": {"types": ["color"]}}}, "compact"]
    )

    assert pluggable.run_post_extract(_payload()) == {
        "global": {"$brand": {"r": 255, "g": 0, "b": 0, "a": 1, "hex": "#ff0000"}}
    }


def test_base_plugin_is_a_no_op() -> None:
    payload = _payload()

    assert Plugin().post_extract(payload) is payload
    assert Plugin({"x": 1}).options == {"x": 1}
