import logging

import pytest

from arf_tools.validator import DuplicateUrl, JsonValidator


def _validate(tree):
    return JsonValidator(logging.getLogger("test.validator")).validate(tree)


def test_clean_tree_passes(catalog):
    result = _validate(catalog)

    assert result.valid is True
    assert result.errors == []
    assert result.duplicate_urls == []
    assert result.duplicate_names == []
    assert result.root_missing_type is False


def test_url_node_without_url_records_exactly_one_error():
    tree = {"type": "folder", "children": [{"name": "Broken", "type": "url"}]}

    result = _validate(tree)

    assert result.valid is False
    assert len(result.errors) == 1
    assert "missing url field" in result.errors[0].message
    assert result.errors[0].path == "Root"
    assert result.errors[0].name == "Broken"


def test_missing_name_and_type_are_errors():
    tree = {
        "type": "folder",
        "children": [
            {"type": "url", "url": "https://a.example"},
            {"name": "NoType"},
        ],
    }

    result = _validate(tree)

    assert result.valid is False
    messages = [e.message for e in result.errors]
    assert messages == [
        "Node missing name at Root",
        "Node 'NoType' missing type at Root",
    ]


def test_errors_are_logged(caplog):
    tree = {"type": "folder", "children": [{"name": "Broken", "type": "url"}]}

    with caplog.at_level(logging.ERROR, logger="test.validator"):
        _validate(tree)

    assert any("missing url field" in r.getMessage() for r in caplog.records)


def test_name_repeated_five_times_is_recorded_once():
    children = [{"name": "Docs", "type": "url", "url": f"https://{i}.example"} for i in range(5)]

    result = _validate({"type": "folder", "children": children})

    assert result.duplicate_names == ["Docs"]
    assert result.valid is True


def test_url_repeated_three_times_is_recorded_twice():
    children = [{"name": f"Link {i}", "type": "url", "url": "https://same.example"} for i in range(3)]

    result = _validate({"type": "folder", "children": children})

    assert result.duplicate_urls == [
        DuplicateUrl(name="Link 1", url="https://same.example"),
        DuplicateUrl(name="Link 2", url="https://same.example"),
    ]
    assert result.valid is True


def test_duplicates_are_counted_across_folders():
    tree = {
        "type": "folder",
        "children": [
            {"name": "A", "type": "folder", "children": [{"name": "Home", "type": "url", "url": "https://x.example"}]},
            {"name": "B", "type": "folder", "children": [{"name": "Home", "type": "url", "url": "https://x.example"}]},
        ],
    }

    result = _validate(tree)

    assert result.duplicate_names == ["Home"]
    assert len(result.duplicate_urls) == 1


def test_children_of_url_nodes_are_not_visited():
    tree = {
        "type": "folder",
        "children": [
            {
                "name": "Link",
                "type": "url",
                "url": "https://a.example",
                "children": [{"type": "url"}],
            }
        ],
    }

    result = _validate(tree)

    assert result.valid is True
    assert result.errors == []


def test_nested_error_path_uses_breadcrumbs():
    tree = {
        "type": "folder",
        "children": [
            {"name": "Outer", "type": "folder", "children": [
                {"name": "Inner", "type": "folder", "children": [{"name": "Bad", "type": "url"}]},
            ]},
        ],
    }

    result = _validate(tree)

    assert result.errors[0].path == "Root > Outer > Inner"


def test_root_without_type_is_only_a_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="test.validator"):
        result = _validate({"children": [{"name": "A", "type": "url", "url": "https://a.example"}]})

    assert result.root_missing_type is True
    assert result.valid is True
    assert any("Root missing type" in r.getMessage() for r in caplog.records)


def test_non_object_child_is_an_error():
    result = _validate({"type": "folder", "children": ["not a node"]})

    assert result.valid is False
    assert result.errors[0].message == "Node is not an object at Root"


def test_empty_document_is_valid_but_warns():
    result = _validate({})

    assert result.valid is True
    assert result.root_missing_type is True


@pytest.mark.parametrize("children", [5, "abc", {"name": "X", "type": "url"}])
def test_folder_with_non_list_children_is_one_error(children):
    tree = {"type": "folder", "children": [{"name": "A", "type": "folder", "children": children}]}

    result = _validate(tree)

    assert result.valid is False
    assert [e.message for e in result.errors] == ["Node 'A' children is not a list at Root"]


def test_root_with_non_list_children_is_an_error():
    result = _validate({"type": "folder", "children": 5})

    assert result.valid is False
    assert [e.message for e in result.errors] == ["Root children is not a list"]


def test_logged_messages_carry_no_level_prefix(caplog):
    with caplog.at_level(logging.WARNING, logger="test.validator"):
        _validate({"children": [{"name": "Broken", "type": "url"}]})

    messages = [r.getMessage() for r in caplog.records]
    assert "Root missing type." in messages
    assert not any(m.startswith(("ERROR:", "WARNING:")) for m in messages)
