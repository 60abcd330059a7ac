import dataclasses

import pytest

from minish.model import Command, Redirection, Token, TokenType


@pytest.mark.parametrize("kind", list(TokenType))
def test_token_str_names_type_and_value(kind):
    token = Token("abc", kind)
    assert str(token) == f"Type={kind.name}, Value='abc'"


def test_token_str_for_word():
    assert str(Token("ls", TokenType.WORD)) == "Type=WORD, Value='ls'"


def test_token_equality_and_hash():
    first = Token(">", TokenType.REDIR_OUT)
    second = Token(">", TokenType.REDIR_OUT)
    assert first == second
    assert hash(first) == hash(second)
    assert first != Token(">", TokenType.WORD)


def test_token_is_immutable():
    token = Token("x", TokenType.WORD)
    with pytest.raises(dataclasses.FrozenInstanceError):
        token.value = "y"
    assert token.value == "x"
    assert str(token) == "Type=WORD, Value='x'"


def test_tokens_of_each_type_are_distinct():
    tokens = {Token("v", kind) for kind in TokenType}
    assert len(tokens) == len(TokenType)
    assert {str(token) for token in tokens} == {
        f"Type={kind.name}, Value='v'" for kind in TokenType
    }


def test_command_defaults_are_independent():
    first = Command()
    second = Command()
    first.args.append("ls")
    first.redirections.append(Redirection("out.txt", TokenType.REDIR_OUT))
    assert second.args == []
    assert second.redirections == []


def test_command_holds_redirections_in_order():
    redirs = [
        Redirection("in.txt", TokenType.REDIR_IN),
        Redirection("out.txt", TokenType.REDIR_APPEND),
    ]
    command = Command(["cat"], redirs)
    assert [r.file for r in command.redirections] == ["in.txt", "out.txt"]
    assert command.redirections[1].type is TokenType.REDIR_APPEND