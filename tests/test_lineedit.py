import io

import pytest

from xvkit.lineedit import (
    BUFSIZE,
    CTRL_N,
    CTRL_P,
    CTRL_U,
    DELETE,
    History,
    LineEditor,
    find_matches,
)


def make_editor(names=(), history=None):
    out = io.StringIO()
    editor = LineEditor(history or History(), lambda: list(names), out)
    return editor, out


def test_history_recall_and_bounds():
    h = History()
    h.add("ls\n")
    assert h.step(-1) == "ls"
    assert h.step(-1) is None
    assert h.step(1) == ""
    assert h.step(1) is None


def test_history_stage_only_at_bottom():
    h = History()
    h.add("one\n")
    h.stage("draft")
    assert h.step(-1) == "one"
    h.stage("ignored")
    assert h.step(1) == "draft"


def test_history_capacity_limits_browsing():
    h = History(4)
    for word in ["a\n", "b\n", "c\n", "d\n", "e\n"]:
        h.add(word)
    seen = [h.step(-1) for _ in range(4)]
    assert seen == ["e", "d", "c", None]
    assert h.cursor == h.written - 3


def test_history_rejects_empty_line():
    with pytest.raises(ValueError):
        History().add("")


def test_find_matches_filters_and_limits():
    names = ["cat", "cp", "echo", "cc"]
    assert find_matches("c", names) == ["cat", "cp", "cc"]
    assert find_matches("c", names, 2) == ["cat", "cp"]
    assert find_matches("z", names) == []


def test_read_plain_line():
    editor, _ = make_editor()
    assert editor.read_line(io.StringIO("echo hi\nmore")) == "echo hi\n"


def test_read_line_at_end_of_input():
    editor, _ = make_editor()
    assert editor.read_line(io.StringIO("")) is None
    assert editor.read_line(io.StringIO("abc")) == "abc"


def test_backspace():
    editor, out = make_editor()
    assert editor.read_line(io.StringIO("ab" + DELETE + "c\n")) == "ac\n"
    assert out.getvalue() == "\b \b"


def test_kill_line():
    editor, _ = make_editor()
    assert editor.read_line(io.StringIO("abc" + CTRL_U + "x\n")) == "x\n"


def test_feed_reports_end_of_line():
    editor, _ = make_editor()
    assert editor.feed("a") is False
    assert editor.feed("\r") is True
    assert editor.text == "a\n"


def test_single_completion():
    editor, out = make_editor(["README", "cat"])
    assert editor.read_line(io.StringIO("ls|ca\t\n")) == "ls|cat\n"
    assert out.getvalue() == "\r\033[K$ ls|cat"


def test_multiple_completions_are_listed():
    editor, out = make_editor(["cat", "cp", "echo"])
    assert editor.read_line(io.StringIO("c\t\n")) == "c\n"
    assert out.getvalue() == "\ncat  cp  \n$ c"


def test_tab_with_empty_prefix_does_nothing():
    editor, out = make_editor(["cat"])
    assert editor.read_line(io.StringIO("ls \t\n")) == "ls \n"
    assert out.getvalue() == ""


def test_history_keys():
    history = History()
    history.add("ls\n")
    editor, _ = make_editor(history=history)
    assert editor.read_line(io.StringIO(CTRL_P + "\n")) == "ls\n"


def test_history_round_trip_restores_draft():
    history = History()
    history.add("ls\n")
    editor, _ = make_editor(history=history)
    line = editor.read_line(io.StringIO("ec" + CTRL_P + CTRL_N + "ho\n"))
    assert line == "echo\n"


def test_line_length_is_capped():
    editor, _ = make_editor()
    line = editor.read_line(io.StringIO("a" * 300))
    assert line == "a" * (BUFSIZE - 1)