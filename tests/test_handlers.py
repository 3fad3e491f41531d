"""Tests for distroute.injection.handlers — handler references and binding."""

import pytest

from distroute.errors import ConfigurationError, HandlerNotFoundError
from distroute.injection.handlers import (
    BoundMethod,
    ControllerRegistry,
    FreeFunction,
    as_handler_ref,
    construct,
    prepare_call,
)
from distroute.injection.resolver import ArgumentResolver
from distroute.injection.services import Container


class Repository:
    pass


class UserId:
    def __init__(self, raw: str) -> None:
        self.raw = raw


class UserController:
    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def show(self, id: UserId, tab: str = "profile"):
        return (self.repo, id, tab)

    not_callable = "attribute"


def view(name: str, greeting: str = "Hello"):
    return f"{greeting}, {name}"


class TestAsHandlerRef:
    def test_callable(self) -> None:
        assert as_handler_ref(view) == FreeFunction(view)

    def test_lambda(self) -> None:
        func = lambda: None  # noqa: E731
        assert as_handler_ref(func) == FreeFunction(func)

    def test_type_at_method(self) -> None:
        assert as_handler_ref("UserController@show") == BoundMethod("UserController", "show")

    def test_passthrough(self) -> None:
        ref = BoundMethod("A", "b")
        assert as_handler_ref(ref) is ref

    @pytest.mark.parametrize("target", ["view", "@show", "UserController@", "A@b@c"])
    def test_bad_strings(self, target: str) -> None:
        with pytest.raises(ConfigurationError, match="Type@method"):
            as_handler_ref(target)

    def test_not_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="got int"):
            as_handler_ref(42)

    def test_display_names(self) -> None:
        assert FreeFunction(view).display_name == "view"
        assert BoundMethod("UserController", "show").display_name == "UserController@show"


class TestControllerRegistry:
    def test_register_default_name(self) -> None:
        registry = ControllerRegistry()
        assert registry.register(UserController) is UserController
        assert "UserController" in registry
        assert registry.lookup("UserController") is UserController
        assert list(registry) == ["UserController"]
        assert len(registry) == 1

    def test_register_custom_name(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController, "Users")
        assert registry.lookup("Users") is UserController
        assert registry.lookup("UserController") is None

    def test_reregister_same_class(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController)
        registry.register(UserController)
        assert len(registry) == 1

    def test_name_collision(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController, "Users")
        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(Repository, "Users")

    def test_resolve(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController)
        assert registry.resolve(BoundMethod("UserController", "show")) == (UserController, "show")

    def test_unknown_type(self) -> None:
        with pytest.raises(HandlerNotFoundError) as exc_info:
            ControllerRegistry().resolve(BoundMethod("Missing", "show"))
        assert exc_info.value.type_name == "Missing"
        assert "Missing@show not found" in str(exc_info.value)

    def test_unknown_method(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController)
        with pytest.raises(HandlerNotFoundError):
            registry.resolve(BoundMethod("UserController", "destroy"))

    def test_non_callable_attribute(self) -> None:
        registry = ControllerRegistry()
        registry.register(UserController)
        with pytest.raises(HandlerNotFoundError):
            registry.resolve(BoundMethod("UserController", "not_callable"))


class TestConstruct:
    def test_services_only(self) -> None:
        services = Container()
        repo = Repository()
        services.bind(Repository, repo)
        controller = construct(UserController, ArgumentResolver(services))
        assert controller.repo is repo

    def test_missing_service_becomes_none(self) -> None:
        controller = construct(UserController, ArgumentResolver())
        assert controller.repo is None


class TestPrepareCall:
    def test_free_function(self) -> None:
        func, args, kwargs = prepare_call(FreeFunction(view), {"name": "alice"})
        assert func is view
        assert args == ["alice", "Hello"]
        assert kwargs == {}

    def test_bound_method(self) -> None:
        services = Container()
        repo = Repository()
        services.bind("repo", repo)
        controllers = ControllerRegistry()
        controllers.register(UserController)

        func, args, kwargs = prepare_call(
            BoundMethod("UserController", "show"),
            {"id": "42"},
            services=services,
            controllers=controllers,
        )
        repo_seen, user_id, tab = func(*args, **kwargs)
        assert repo_seen is repo
        assert isinstance(user_id, UserId)
        assert user_id.raw == "42"
        assert tab == "profile"

    def test_path_values_do_not_reach_constructor(self) -> None:
        controllers = ControllerRegistry()
        controllers.register(UserController)
        func, _, _ = prepare_call(
            BoundMethod("UserController", "show"),
            {"repo": "from-path", "id": "1"},
            controllers=controllers,
        )
        assert func.__self__.repo is None

    def test_bound_method_without_registry(self) -> None:
        with pytest.raises(HandlerNotFoundError):
            prepare_call(BoundMethod("UserController", "show"), {})
