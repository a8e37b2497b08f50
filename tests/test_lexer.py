import pytest

from replframe.lexer import (
    TokenizeError,
    UnknownEscapeError,
    UnterminatedQuoteError,
    split_whitespace,
    tokenize,
)


class TestTokenize:
    def test_empty_line_is_single_empty_token(self):
        assert tokenize("") == [""]

    def test_whitespace_only_is_single_empty_token(self):
        assert tokenize("    ") == [""]

    def test_splits_on_spaces(self):
        assert tokenize("hello world") == ["hello", "world"]

    def test_space_runs_collapse(self):
        assert tokenize("  get   a  b ") == ["get", "a", "b"]

    def test_double_quotes_group(self):
        assert tokenize('"hello world" world') == ["hello world", "world"]

    def test_single_quotes_group(self):
        assert tokenize("say 'a  b'") == ["say", "a  b"]

    def test_escaped_quote_inside_quotes(self):
        assert tokenize('"hello\\"" world') == ['hello"', "world"]

    def test_other_quote_style_is_literal_inside_quotes(self):
        assert tokenize("\"it's\" 'say \"hi\"'") == ["it's", 'say "hi"']

    def test_escapes(self):
        assert tokenize("a\\tb c\\nd \\\\ \\' \\\"") == ["a\tb", "c\nd", "\\", "'", '"']

    def test_escaped_quote_does_not_open_quote(self):
        assert tokenize('\\"a b') == ['"a', "b"]

    def test_escaped_backslash_before_quote_still_opens_quote(self):
        assert tokenize('\\\\"a b"') == ["\\", "a b"]

    def test_escaped_space_is_unknown_escape(self):
        with pytest.raises(UnknownEscapeError):
            tokenize("a\\ b")

    def test_empty_quotes_make_empty_token(self):
        assert tokenize('set key ""') == ["set", "key", ""]

    def test_quote_only_token(self):
        assert tokenize('""') == [""]

    def test_quoted_token_made_of_escapes(self):
        assert tokenize('"\\n"') == ["\n"]


class TestAdjacentQuotes:
    """Quoted regions never merge with text or other quoted regions next to them."""

    def test_adjacent_quoted_segments(self):
        assert tokenize("'a'\"b\"") == ["a", "b"]

    def test_quoted_then_bare(self):
        assert tokenize('"ab"cd') == ["ab", "cd"]

    def test_bare_then_quoted(self):
        assert tokenize('ab"cd"') == ["ab", "cd"]

    def test_bare_quoted_bare(self):
        assert tokenize("x'y z'w") == ["x", "y z", "w"]


class TestTokenizeErrors:
    def test_unknown_escape(self):
        with pytest.raises(UnknownEscapeError) as e:
            tokenize("\\hello")

        assert e.value.char == "h"
        assert e.value.position == 0

    def test_unknown_escape_inside_quotes(self):
        with pytest.raises(UnknownEscapeError) as e:
            tokenize('say "a\\qb"')

        assert e.value.char == "q"
        assert e.value.position == 6

    def test_dangling_escape(self):
        with pytest.raises(UnknownEscapeError) as e:
            tokenize("abc\\")

        assert e.value.char is None

    def test_unterminated_double_quote(self):
        with pytest.raises(UnterminatedQuoteError) as e:
            tokenize('say "hello world')

        assert e.value.quote == '"'
        assert e.value.position == 4

    def test_unterminated_single_quote(self):
        with pytest.raises(UnterminatedQuoteError):
            tokenize("'abc\"")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            tokenize("'")

        assert issubclass(UnknownEscapeError, TokenizeError)
        assert issubclass(UnterminatedQuoteError, TokenizeError)

    def test_error_message_includes_line(self):
        with pytest.raises(TokenizeError, match="unterminated quote"):
            tokenize("'open")


class TestSplitWhitespace:
    def test_no_quote_processing(self):
        assert split_whitespace('say "a b"') == ["say", '"a', 'b"']

    def test_backslashes_are_literal(self):
        assert split_whitespace("\\hello") == ["\\hello"]

    def test_empty_line(self):
        assert split_whitespace("\r\n") == []

    def test_tabs_and_spaces(self):
        assert split_whitespace("a\tb   c\n") == ["a", "b", "c"]
