"""Tests for distroute.injection.resolver — layered argument resolution."""

import logging
from typing import Protocol, runtime_checkable

import pytest

from distroute.errors import ParameterConversionError
from distroute.injection.parameters import BUILTIN, HandlerParameter, NamedType
from distroute.injection.resolver import ArgumentResolver
from distroute.injection.services import Container, type_key


class UserId:
    def __init__(self, raw: str) -> None:
        self.value = int(raw)


class Mailer:
    pass


class FancyMailer(Mailer):
    pass


class Clock:
    pass


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


@runtime_checkable
class CheckedNotifier(Protocol):
    def notify(self, message: str) -> None: ...


class EmailNotifier:
    def notify(self, message: str) -> None:
        pass


def _builtin(name: str, **kw: object) -> HandlerParameter:
    return HandlerParameter(name, BUILTIN, **kw)  # type: ignore[arg-type]


def _named(name: str, cls: type, **kw: object) -> HandlerParameter:
    return HandlerParameter(name, NamedType(cls), **kw)  # type: ignore[arg-type]


class TestPathValues:
    def test_builtin_gets_raw_string(self) -> None:
        resolver = ArgumentResolver()
        assert resolver.resolve(_builtin("id"), {"id": "42"}) == "42"

    def test_no_numeric_coercion(self) -> None:
        # An ``int`` annotation is builtin: the raw string is passed through.
        resolver = ArgumentResolver()
        value = resolver.resolve(_builtin("id"), {"id": "007"})
        assert value == "007"
        assert isinstance(value, str)

    def test_named_type_wraps_raw_value(self) -> None:
        resolver = ArgumentResolver()
        value = resolver.resolve(_named("id", UserId), {"id": "42"})
        assert isinstance(value, UserId)
        assert value.value == 42

    def test_path_value_beats_service_and_default(self) -> None:
        services = Container()
        services.bind("id", UserId("1"))
        resolver = ArgumentResolver(services)
        param = _named("id", UserId, has_default=True, default=UserId("2"))
        assert resolver.resolve(param, {"id": "3"}).value == 3

    def test_conversion_failure(self) -> None:
        resolver = ArgumentResolver()
        with pytest.raises(ParameterConversionError) as exc_info:
            resolver.resolve(_named("id", UserId), {"id": "abc"})
        assert exc_info.value.name == "id"
        assert exc_info.value.value == "abc"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_conversion_failure_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ArgumentResolver().resolve(_named("id", UserId), {"id": "abc"})


class TestServices:
    def test_lookup_by_name(self) -> None:
        services = Container()
        mailer = Mailer()
        services.bind("mailer", mailer)
        resolver = ArgumentResolver(services)
        assert resolver.resolve(_named("mailer", Mailer)) is mailer

    def test_lookup_by_type_when_name_missing(self) -> None:
        services = Container()
        mailer = Mailer()
        services.bind(Mailer, mailer)
        resolver = ArgumentResolver(services)
        assert resolver.resolve(_named("anything", Mailer)) is mailer

    def test_name_preferred_over_type(self) -> None:
        services = Container()
        by_name, by_type = Mailer(), Mailer()
        services.bind("mailer", by_name)
        services.bind(Mailer, by_type)
        resolver = ArgumentResolver(services)
        assert resolver.resolve(_named("mailer", Mailer)) is by_name

    def test_subclass_accepted(self) -> None:
        services = Container()
        fancy = FancyMailer()
        services.bind("mailer", fancy)
        assert ArgumentResolver(services).resolve(_named("mailer", Mailer)) is fancy

    def test_wrong_type_discarded(self, caplog: pytest.LogCaptureFixture) -> None:
        services = Container()
        services.bind("mailer", Clock())
        resolver = ArgumentResolver(services)
        with caplog.at_level(logging.DEBUG, logger="distroute.injection"):
            assert resolver.resolve(_named("mailer", Mailer)) is None
        assert "Discarding service 'mailer'" in caplog.text

    def test_wrong_type_by_name_does_not_fall_back_to_type(self) -> None:
        services = Container()
        services.bind("mailer", Clock())
        services.bind(Mailer, Mailer())
        assert ArgumentResolver(services).resolve(_named("mailer", Mailer)) is None

    def test_wrong_type_falls_back_to_default(self) -> None:
        services = Container()
        services.bind("mailer", Clock())
        default = Mailer()
        param = _named("mailer", Mailer, has_default=True, default=default)
        assert ArgumentResolver(services).resolve(param) is default

    def test_builtin_never_looked_up(self) -> None:
        services = Container()
        services.bind("name", "from-services")
        assert ArgumentResolver(services).resolve(_builtin("name")) is None

    def test_lookup_queried_by_type_key(self) -> None:
        queried: list[str] = []

        class RecordingLookup:
            def has(self, key: str) -> bool:
                queried.append(key)
                return False

            def get(self, key: str) -> object:
                raise AssertionError("get() must not be called")

        ArgumentResolver(RecordingLookup()).resolve(_named("clock", Clock))
        assert queried == ["clock", type_key(Clock)]


class TestProtocolServices:
    def test_plain_protocol_trusted_by_name(self) -> None:
        services = Container()
        notifier = EmailNotifier()
        services.bind("notifier", notifier)
        resolver = ArgumentResolver(services)
        assert resolver.resolve(_named("notifier", Notifier)) is notifier

    def test_plain_protocol_trusted_by_type_key(self) -> None:
        services = Container()
        notifier = object()
        services.bind(Notifier, notifier)
        assert ArgumentResolver(services).resolve(_named("anything", Notifier)) is notifier

    def test_runtime_checkable_protocol_still_checked(self) -> None:
        services = Container()
        services.bind("notifier", object())
        assert ArgumentResolver(services).resolve(_named("notifier", CheckedNotifier)) is None

    def test_runtime_checkable_protocol_accepts_match(self) -> None:
        services = Container()
        notifier = EmailNotifier()
        services.bind("notifier", notifier)
        resolver = ArgumentResolver(services)
        assert resolver.resolve(_named("notifier", CheckedNotifier)) is notifier


class TestDefaults:
    def test_default_without_lookup(self) -> None:
        param = _builtin("cat", has_default=True, default="Merlin")
        assert ArgumentResolver().resolve(param) == "Merlin"

    def test_no_default_resolves_to_none(self) -> None:
        assert ArgumentResolver().resolve(_builtin("cat")) is None
        assert ArgumentResolver().resolve(_named("mailer", Mailer)) is None

    def test_missing_path_value_falls_back(self) -> None:
        param = _builtin("second", has_default=True, default=2)
        assert ArgumentResolver().resolve(param, {"first": "x"}) == 2

    def test_idempotent(self) -> None:
        services = Container()
        services.bind(Mailer, Mailer())
        resolver = ArgumentResolver(services)
        param = _named("mailer", Mailer)
        assert resolver.resolve(param) is resolver.resolve(param)


class TestResolveAll:
    def test_positional_in_declaration_order(self) -> None:
        params = [_builtin("a"), _builtin("b", has_default=True, default="B"), _builtin("c")]
        args, kwargs = ArgumentResolver().resolve_all(params, {"a": "1", "c": "3"})
        assert args == ["1", "B", "3"]
        assert kwargs == {}

    def test_keyword_only(self) -> None:
        params = [_builtin("a"), _builtin("flag", keyword_only=True, has_default=True, default=False)]
        args, kwargs = ArgumentResolver().resolve_all(params, {"a": "x"})
        assert args == ["x"]
        assert kwargs == {"flag": False}

    def test_empty(self) -> None:
        assert ArgumentResolver().resolve_all([]) == ([], {})
