import pytest

from vault_commander.core.edit_session import (
    MODE_EDITING,
    MODE_WRITING,
    CreatingNew,
    EditingExisting,
    new_key_seed,
    parent_collection,
    parse_buffer,
    render_value,
    values_equal,
)
from vault_commander.core.errors import SecretParseError


def test_editing_existing_snapshot_is_a_copy():
    value = {"a": {"b": [1, 2]}}
    sess = EditingExisting.start("kv/x", value)
    value["a"]["b"].append(3)
    assert sess.snapshot == {"a": {"b": [1, 2]}}
    assert sess.mode == MODE_EDITING


def test_creating_new_has_writing_mode():
    sess = CreatingNew(path="kv/app/new", parent="kv/app")
    assert sess.mode == MODE_WRITING
    assert not hasattr(sess, "snapshot")


def test_render_value_is_sorted_and_indented():
    assert render_value({"b": 1, "a": "x"}) == '{\n    "a": "x",\n    "b": 1\n}'


def test_parse_buffer_accepts_objects():
    assert parse_buffer('{"k": [1, {"n": null}]}') == {"k": [1, {"n": None}]}


@pytest.mark.parametrize("text", ["", "not json", "[1, 2]", '"s"', "{bad}"])
def test_parse_buffer_rejects_non_objects(text):
    with pytest.raises(SecretParseError):
        parse_buffer(text)


def test_values_equal_ignores_key_order():
    assert values_equal({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"d": 3, "c": 2}, "a": 1})


def test_values_equal_is_type_sensitive():
    assert not values_equal({"a": 1}, {"a": 1.0})
    assert not values_equal({"a": 1}, {"a": True})
    assert not values_equal({"a": "1"}, {"a": 1})


def test_values_equal_detects_changes():
    assert not values_equal({"a": 1}, {"a": 2})
    assert not values_equal({"a": 1}, {"a": 1, "b": 2})
    assert not values_equal({"a": [1, 2]}, {"a": [2, 1]})


def test_parent_collection():
    assert parent_collection("kv/app/db") == "kv/app"
    assert parent_collection("kv/") == "kv"
    assert parent_collection("plain") == "plain"


def test_new_key_seed_places_caret_after_separator():
    assert new_key_seed("secret/app/db") == ("secret/app/", len("secret/app/"))
    assert new_key_seed("secret/") == ("secret/", 7)
