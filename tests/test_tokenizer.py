"""Tests for the command-line tokenizer.

``tokenize`` turns one simple command into argv; ``split_compound``
cuts a full line at the ``&&``, ``||``, ``;`` and ``|`` operators.
"""

from sandbox_shell.tokenizer import Operator, Segment, split_compound, tokenize


class TestTokenize:
    """Verify whitespace splitting and quoting."""

    def test_splits_on_whitespace(self) -> None:
        """Runs of spaces and tabs should separate tokens."""
        assert tokenize("ls   -la\tsrc") == ["ls", "-la", "src"]

    def test_empty_line(self) -> None:
        """A blank line should produce no tokens."""
        assert tokenize("   ") == []

    def test_double_quotes_group(self) -> None:
        """Double-quoted text should be one token without the quotes."""
        assert tokenize('echo "a  b"') == ["echo", "a  b"]

    def test_single_quotes_group(self) -> None:
        """Single-quoted text should be one token without the quotes."""
        assert tokenize("cat 'my file.txt'") == ["cat", "my file.txt"]

    def test_other_quote_is_literal_inside(self) -> None:
        """A quote of the other kind inside quotes is kept literally."""
        assert tokenize("echo \"it's\"") == ["echo", "it's"]

    def test_quotes_inside_token(self) -> None:
        """Quotes may start mid-token."""
        assert tokenize('echo --name="x y"') == ["echo", "--name=x y"]

    def test_empty_quoted_token(self) -> None:
        """An explicitly quoted empty string is an argument of its own."""
        assert tokenize("echo '' b") == ["echo", "", "b"]

    def test_unterminated_quote_closes_at_end(self) -> None:
        """An unterminated quote should run to the end of the line."""
        assert tokenize('echo "hello world') == ["echo", "hello world"]

    def test_no_expansion(self) -> None:
        """Variables and globs are passed through untouched."""
        assert tokenize("echo $HOME *.txt") == ["echo", "$HOME", "*.txt"]


class TestSplitCompound:
    """Verify splitting at compound operators."""

    def test_single_command(self) -> None:
        """A line without operators is one segment."""
        assert split_compound("ls -l") == [Segment("ls -l")]

    def test_all_operators(self) -> None:
        """Each segment should remember the operator that follows it."""
        segments = split_compound("a && b || c ; d | e")
        assert [s.text for s in segments] == ["a", "b", "c", "d", "e"]
        assert [s.operator for s in segments] == [
            Operator.AND,
            Operator.OR,
            Operator.SEQUENCE,
            Operator.PIPE,
            None,
        ]

    def test_operators_inside_quotes_are_literal(self) -> None:
        """Quoted operators should not split the line."""
        segments = split_compound("echo 'a && b' | uniq")
        assert segments[0].text == "echo 'a && b'"
        assert segments[0].operator is Operator.PIPE

    def test_no_spaces_needed(self) -> None:
        """Operators split even without surrounding whitespace."""
        assert [s.text for s in split_compound("pwd&&ls")] == ["pwd", "ls"]

    def test_empty_segments_dropped(self) -> None:
        """Doubled separators should not produce empty segments."""
        assert [s.text for s in split_compound("a ;; b")] == ["a", "b"]
