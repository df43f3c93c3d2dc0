import pytest

from mixbump.core.entry_codec import (
    ListEntry,
    contains_equivalent,
    detect_inner_indent,
    find_entry,
    find_entry_key,
    insert_entry,
    remove_entry,
    render,
    replace_entry,
)
from mixbump.core.errors import InvalidEntryError, InvalidIdentifierError

ENTRY = 'precommit: ["format", "test"]'


def test_render_canonical_form():
    assert render("precommit", ["format", "test"]) == ENTRY


def test_render_escapes_step_strings():
    rendered = render("a", ['say "hi"', "#{x}", "c:\\d"])
    assert rendered == 'a: ["say \\"hi\\"", "\\#{x}", "c:\\\\d"]'


def test_list_entry_validates_name():
    for name in ["", "pre-commit", "1abc", "pre commit", "precommit\n"]:
        with pytest.raises(InvalidIdentifierError):
            ListEntry(name, ("test",))

    # Also usable as a ValueError
    with pytest.raises(ValueError):
        ListEntry("bad!", ())


def test_list_entry_needs_steps():
    with pytest.raises(InvalidEntryError):
        ListEntry("precommit", ())


def test_list_entry_freezes_steps():
    entry = ListEntry("precommit", ["format", "test"])
    assert entry.steps == ("format", "test")
    assert entry.render() == ENTRY


def test_find_entry_key_only_at_top_level():
    assert find_entry_key('[b: ["a: nope"], a: ["x"]]', "a")
    assert not find_entry_key('[b: [a: ["x"]]]', "a")
    assert not find_entry_key('[\n  # a: ["x"]\n  b: ["y"]\n]', "a")
    assert not find_entry_key('[precommit: ["x"]]', "pre")


def test_contains_equivalent_is_loose():
    list_text = '[precommit: ["test", "format", "extra"]]'
    assert contains_equivalent(list_text, "precommit", ["format", "test"])
    assert not contains_equivalent(list_text, "precommit", ["format", "credo"])
    assert not contains_equivalent(list_text, "other", ["format"])


def test_detect_inner_indent():
    assert detect_inner_indent('[\n    a: 1\n  ]') == "    "
    assert detect_inner_indent("[\n  ]") == "    "


def test_insert_into_multiline_list():
    list_text = '[\n  test: ["test"]\n]'
    assert insert_entry(list_text, ENTRY) == '[\n  test: ["test"],\n  precommit: ["format", "test"]\n]'


def test_insert_into_single_line_lists():
    assert insert_entry("[]", 'a: ["b"]') == '[a: ["b"]]'
    assert insert_entry('[test: ["test"]]', 'a: ["b"]') == '[test: ["test"], a: ["b"]]'
    assert insert_entry('[test: ["test"],]', 'a: ["b"]') == '[test: ["test"], a: ["b"],]'


def test_insert_keeps_trailing_comma_style():
    list_text = '[\n  test: ["test"],\n]'
    assert insert_entry(list_text, 'a: ["b"]') == '[\n  test: ["test"],\n  a: ["b"],\n]'


def test_insert_into_empty_multiline_list():
    assert insert_entry("[\n]", 'a: ["b"]') == '[\n  a: ["b"]\n]'
    assert insert_entry("[\n  ]", 'a: ["b"]') == '[\n    a: ["b"]\n  ]'


def test_insert_below_trailing_comment():
    list_text = '[\n  test: ["test"] # run tests\n]'
    expected = '[\n  test: ["test"], # run tests\n  a: ["b"]\n]'
    assert insert_entry(list_text, 'a: ["b"]') == expected


def test_insert_keeps_crlf_line_endings():
    list_text = '[\r\n  test: ["test"]\r\n]'
    expected = '[\r\n  test: ["test"],\r\n  precommit: ["format", "test"]\r\n]'
    assert insert_entry(list_text, ENTRY) == expected


def test_insert_ignores_brackets_in_strings():
    list_text = '[\n  odd: ["echo ]"]\n]'
    assert insert_entry(list_text, 'a: ["b"]') == '[\n  odd: ["echo ]"],\n  a: ["b"]\n]'


def test_replace_entry_keeps_neighbours():
    list_text = '[a: ["x"], b: ["y"]]'
    span = find_entry(list_text, "a")
    assert replace_entry(list_text, span, 'a: ["z"]') == '[a: ["z"], b: ["y"]]'


def test_remove_entry_single_line():
    list_text = '[a: ["x"], b: ["y"]]'
    assert remove_entry(list_text, find_entry(list_text, "a")) == '[b: ["y"]]'
    assert remove_entry(list_text, find_entry(list_text, "b")) == '[a: ["x"]]'

    only = '[a: ["x"]]'
    assert remove_entry(only, find_entry(only, "a")) == "[]"


def test_remove_middle_entry_takes_its_line():
    list_text = '[\n  a: ["x"],\n  b: ["y"],\n  c: ["z"]\n]'
    assert remove_entry(list_text, find_entry(list_text, "b")) == '[\n  a: ["x"],\n  c: ["z"]\n]'


def test_remove_middle_entry_with_crlf():
    list_text = '[\r\n  a: ["x"],\r\n  b: ["y"],\r\n  c: ["z"]\r\n]'
    assert remove_entry(list_text, find_entry(list_text, "b")) == '[\r\n  a: ["x"],\r\n  c: ["z"]\r\n]'


def test_remove_last_entry_takes_its_comment():
    list_text = '[\n  a: ["x"],\n  precommit: ["format", "test"] # mine\n]'
    assert remove_entry(list_text, find_entry(list_text, "precommit")) == '[\n  a: ["x"]\n]'

    crlf = list_text.replace("\n", "\r\n")
    assert remove_entry(crlf, find_entry(crlf, "precommit")) == '[\r\n  a: ["x"]\r\n]'


def test_remove_last_entry_with_trailing_comma():
    list_text = '[\n  test: ["test"],\n  a: ["b"],\n]'
    assert remove_entry(list_text, find_entry(list_text, "a")) == '[\n  test: ["test"],\n]'


def test_remove_collapses_blank_lines_it_leaves_behind():
    list_text = '[\n  a: ["x"],\n\n  b: ["y"]\n]'
    assert remove_entry(list_text, find_entry(list_text, "b")) == '[\n  a: ["x"]\n]'


def test_insert_then_remove_restores_text():
    samples = [
        "[]",
        "[\n]",
        '[\n  test: ["test"]\n]',
        '[\n  test: ["test"],\n]',
        '[\n  test: ["test"] # run tests\n]',
        '[test: ["test"]]',
        '[\r\n  test: ["test"]\r\n]',
        '[\r\n  test: ["test"],\r\n]',
        '[\r\n  test: ["test"] # run tests\r\n]',
    ]
    for list_text in samples:
        inserted = insert_entry(list_text, ENTRY)
        span = find_entry(inserted, "precommit")
        assert remove_entry(inserted, span) == list_text
