"""Tests for the tokenizer module."""

from mysh.tokenizer import MAX_TOKENS, has_operators, tokenize


class TestBasicTokenization:
    def test_simple_command(self):
        assert tokenize("echo hello") == ["echo", "hello"]

    def test_collapses_repeated_spaces(self):
        assert tokenize("echo  a   b") == ["echo", "a", "b"]

    def test_tabs_are_separators(self):
        assert tokenize("ls\t-la\t\t/tmp") == ["ls", "-la", "/tmp"]

    def test_trailing_newline(self):
        assert tokenize("pwd\n") == ["pwd"]

    def test_empty_string(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize(" \t  \n") == []

    def test_no_empty_tokens(self):
        assert "" not in tokenize("  a  b  ")

    def test_preserves_paths(self):
        assert tokenize("cat /usr/local/bin/foo") == ["cat", "/usr/local/bin/foo"]


class TestNoQuoting:
    def test_quotes_are_literal(self):
        assert tokenize('echo "hello world"') == ["echo", '"hello', 'world"']

    def test_backslash_is_literal(self):
        assert tokenize(r"echo a\ b") == ["echo", "a\\", "b"]


class TestOperators:
    def test_standalone_operators(self):
        assert tokenize("cat < in > out | wc") == ["cat", "<", "in", ">", "out", "|", "wc"]

    def test_attached_operators_stay_in_word(self):
        assert tokenize("echo hi>out") == ["echo", "hi>out"]

    def test_has_operators(self):
        assert has_operators(["ls", "|", "wc"])
        assert has_operators(["cat", "<", "f"])
        assert not has_operators(["echo", "a|b"])


class TestLimit:
    def test_unlimited_by_default(self):
        line = " ".join(["x"] * 200)
        assert len(tokenize(line)) == 200

    def test_excess_tokens_dropped(self):
        line = " ".join(str(i) for i in range(100))
        tokens = tokenize(line, limit=MAX_TOKENS)
        assert len(tokens) == 66
        assert tokens[-1] == "65"

    def test_limit_not_reached(self):
        assert tokenize("a b", limit=5) == ["a", "b"]
