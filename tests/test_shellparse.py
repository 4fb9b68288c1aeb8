import pytest

from xvkit.layout import OpenFlag
from xvkit.shellparse import (
    BackCmd,
    ExecCmd,
    ListCmd,
    Parser,
    PipeCmd,
    RedirCmd,
    ShellSyntaxError,
    SubshellCmd,
    parse_command,
)

WRITE_TRUNC = OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC
APPEND = OpenFlag.WRONLY | OpenFlag.CREATE


def test_simple_words():
    assert parse_command("echo hi\n") == ExecCmd(["echo", "hi"])


def test_empty_line():
    assert parse_command("") == ExecCmd([])
    assert parse_command("   \n") == ExecCmd([])


def test_redirections_wrap_in_order():
    cmd = parse_command("cat < in > out\n")
    assert cmd == RedirCmd(RedirCmd(ExecCmd(["cat"]), "in", OpenFlag.RDONLY, 0), "out", WRITE_TRUNC, 1)


def test_append_redirection():
    assert parse_command("echo x >> log") == RedirCmd(ExecCmd(["echo", "x"]), "log", APPEND, 1)


def test_symbols_split_words():
    assert parse_command("echo>out") == RedirCmd(ExecCmd(["echo"]), "out", WRITE_TRUNC, 1)


def test_words_after_redirection_join_argv():
    cmd = parse_command("grep < f a b")
    assert cmd == RedirCmd(ExecCmd(["grep", "a", "b"]), "f", OpenFlag.RDONLY, 0)


def test_pipe_is_right_associative():
    cmd = parse_command("a | b | c")
    assert cmd == PipeCmd(ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"])))


def test_list_and_trailing_semicolon():
    assert parse_command("a ; b") == ListCmd(ExecCmd(["a"]), ExecCmd(["b"]))
    assert parse_command("a;") == ListCmd(ExecCmd(["a"]), ExecCmd([]))


def test_background():
    assert parse_command("a &") == BackCmd(ExecCmd(["a"]))
    assert parse_command("a & &") == BackCmd(BackCmd(ExecCmd(["a"])))


def test_subshell_with_redirect():
    cmd = parse_command("(a ; b) > f")
    assert cmd == RedirCmd(SubshellCmd(ListCmd(ExecCmd(["a"]), ExecCmd(["b"]))), "f", WRITE_TRUNC, 1)


def test_parser_object_and_nul_truncation():
    assert Parser("x y").parse() == ExecCmd(["x", "y"])
    assert Parser("a\0b c").parse() == ExecCmd(["a"])


def test_missing_close_paren():
    with pytest.raises(ShellSyntaxError, match="missing \\)"):
        parse_command("(a")


def test_missing_redirect_file():
    with pytest.raises(ShellSyntaxError, match="missing file for redirection"):
        parse_command("a >")


def test_leftovers():
    with pytest.raises(ShellSyntaxError, match="leftovers: \\)"):
        parse_command("a )")


def test_paren_inside_words_is_syntax_error():
    with pytest.raises(ShellSyntaxError, match="^syntax$"):
        parse_command("a (")


def test_too_many_args():
    assert parse_command(" ".join("abcdefghi")) == ExecCmd(list("abcdefghi"))
    with pytest.raises(ShellSyntaxError, match="too many args"):
        parse_command(" ".join("abcdefghij"))


def test_error_is_value_error():
    with pytest.raises(ValueError):
        parse_command("<")