import json

import pytest

from arf_tools.exceptions import ArfParseError
from arf_tools.loader import load_tree


def test_load_tree_parses_json(tmp_path, catalog):
    path = tmp_path / "arf.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")

    assert load_tree(path) == catalog


def test_load_tree_wraps_syntax_errors(tmp_path):
    path = tmp_path / "arf.json"
    path.write_text('{"children": [', encoding="utf-8")

    with pytest.raises(ArfParseError) as exc_info:
        load_tree(path)

    assert isinstance(exc_info.value.original, json.JSONDecodeError)
    assert exc_info.value.path == str(path)


def test_load_tree_wraps_missing_file(tmp_path):
    with pytest.raises(ArfParseError) as exc_info:
        load_tree(tmp_path / "missing.json")

    assert isinstance(exc_info.value.original, OSError)
