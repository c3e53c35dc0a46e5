from __future__ import annotations

from gif_provider.errors import (
    CommandSyntaxError,
    ClientInputError,
    ErrorGenerator,
    PluginError,
    TransportError,
)


def test_from_message_is_domain_error() -> None:
    err = ErrorGenerator("plugin-id").from_message("oops", CommandSyntaxError)
    assert isinstance(err, ClientInputError)
    assert err.where == "plugin-id"
    assert not err.is_technical
    assert err.render() == "oops"
    assert err.render(technical=True) == "oops"


def test_from_error_is_technical_error() -> None:
    cause = ValueError("strange failure")
    err = ErrorGenerator("plugin-id").from_error("oops", cause, TransportError)
    assert isinstance(err, TransportError)
    assert err.cause is cause
    assert err.is_technical
    assert str(err) == "oops: strange failure"
    assert err.render(technical=False) == "oops"


def test_default_kind() -> None:
    err = ErrorGenerator("p").from_message("plain")
    assert type(err) is PluginError
