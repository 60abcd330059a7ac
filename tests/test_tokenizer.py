import pytest

from minish.model import Token, TokenType
from minish.tokenizer import format_tokens, tokenize


def values(tokens):
    return [token.value for token in tokens]


def types(tokens):
    return [token.type for token in tokens]


def test_simple_redirection_line():
    tokens = tokenize("ls -l > out.txt")
    assert values(tokens) == ["ls", "-l", ">", "out.txt"]
    assert types(tokens) == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.REDIR_OUT,
        TokenType.WORD,
    ]


def test_all_operators():
    tokens = tokenize(">> << > < |")
    assert values(tokens) == [">>", "<<", ">", "<", "|"]
    assert types(tokens) == [
        TokenType.REDIR_APPEND,
        TokenType.HEREDOC,
        TokenType.REDIR_OUT,
        TokenType.REDIR_IN,
        TokenType.PIPE,
    ]


def test_operators_split_words_without_spaces():
    tokens = tokenize("a|b>c")
    assert values(tokens) == ["a", "|", "b", ">", "c"]
    assert types(tokens)[1] is TokenType.PIPE


def test_triple_angle_is_append_then_out():
    assert types(tokenize(">>>")) == [TokenType.REDIR_APPEND, TokenType.REDIR_OUT]


@pytest.mark.parametrize("text", ["", "   ", "\t\n\v\f\r "])
def test_blank_input_gives_no_tokens(text):
    assert tokenize(text) == []


def test_double_quotes_keep_spaces():
    assert values(tokenize('echo "hello world"')) == ["echo", "hello world"]


def test_single_quotes_keep_other_quote():
    assert values(tokenize("echo 'say \"hi\"'")) == ["echo", 'say "hi"']


def test_unterminated_quote_runs_to_end():
    assert values(tokenize('echo "abc def')) == ["echo", "abc def"]


def test_empty_quotes_give_empty_word():
    assert tokenize("''") == [Token("", TokenType.WORD)]


def test_quoted_operator_is_word():
    tokens = tokenize("'|'")
    assert tokens == [Token("|", TokenType.WORD)]


def test_assignment_with_quotes_is_single_token():
    tokens = tokenize('export VAR="a b" next')
    assert values(tokens) == ["export", 'VAR="a b"', "next"]
    assert all(kind is TokenType.WORD for kind in types(tokens))


def test_assignment_with_unterminated_quote():
    assert values(tokenize("X='open")) == ["X='open"]


def test_plain_assignment_is_word():
    assert values(tokenize("export VAR=plain")) == ["export", "VAR=plain"]


def test_invalid_identifier_is_not_assignment():
    assert values(tokenize('1VAR="x"')) == ["1VAR=", "x"]


def test_word_stops_at_quote():
    assert values(tokenize("ab'cd'ef")) == ["ab", "cd", "ef"]


@pytest.mark.parametrize(
    "words",
    [["ls"], ["grep", "-n", "main", "file.c"], ["a_b", "C-D", "e.f/g"]],
)
def test_plain_words_round_trip(words):
    tokens = tokenize(" ".join(words))
    assert values(tokens) == words
    assert all(kind is TokenType.WORD for kind in types(tokens))


def test_format_tokens():
    text = format_tokens(tokenize("ls | wc"))
    assert text == (
        "Token 0: Type=WORD, Value='ls'\n"
        "Token 1: Type=PIPE, Value='|'\n"
        "Token 2: Type=WORD, Value='wc'\n"
    )


def test_format_tokens_empty():
    assert format_tokens([]) == ""