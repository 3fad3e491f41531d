"""Users — a small distroute app.

Demonstrates verb helpers, ``Type@method`` controllers built from a
service container, typed path values, optional placeholders, route
groups, and an async handler.

Run:
    python app.py

Inspect it (from this directory):
    PYTHONPATH=. distroute routes app
    PYTHONPATH=. distroute match app GET /users/7/posts
"""

from distroute import Container, Request, Response, Router


class UserId:
    """A path value wrapped in a domain type."""

    def __init__(self, raw: str) -> None:
        self.value = int(raw)


class UserRepository:
    def __init__(self) -> None:
        self._users = {1: "ada", 2: "grace", 7: "linus"}

    def name(self, user_id: UserId) -> str | None:
        return self._users.get(user_id.value)

    def all(self) -> list[str]:
        return sorted(self._users.values())


services = Container()
services.bind(UserRepository, UserRepository())

router = Router(services=services)


@router.controller
class UserController:
    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def index(self) -> Response:
        return Response(", ".join(self.repo.all()))

    def show(self, id: UserId, tab: str = "profile") -> Response:
        name = self.repo.name(id)
        if name is None:
            return Response(f"No user {id.value}").with_status(404)
        return Response(f"{name}: {tab}")


router.get("/users", "UserController@index", name="users.index")
router.get("/users/{id:(\\d+)}/{?tab}", "UserController@show", name="users.show")


@router.route("/hello/{name}/{?greeting}")
def hello(name: str, greeting: str = "Hello") -> Response:
    return Response(f"{greeting}, {name}!")


with router.group("/admin"):

    @router.route("/stats", methods=["GET", "HEAD"])
    async def stats(repo: UserRepository) -> Response:
        return Response(f"{len(repo.all())} users").with_header("X-Admin", "1")


if __name__ == "__main__":
    print(router.dispatch(Request("GET", "/users/7/posts")).text)
