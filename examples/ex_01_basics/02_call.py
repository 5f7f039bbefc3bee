"""Calling functions and methods with injection.

``Container.call`` fills the parameters the caller leaves out, the same way
``make`` fills constructor parameters.
"""

from phiwire import Container


class Clock:
    def now(self) -> str:
        return "12:00"


class Reports:
    @staticmethod
    def render(clock: Clock, title) -> str:  # noqa: ANN001
        return f"{title} at {clock.now()}"


def handler(clock: Clock, user: str) -> str:
    return f"{user} asked at {clock.now()}"


def main() -> None:
    container = Container()

    print(container.call(handler, ["alice"]))
    print(container.call((Reports, "render"), ["Daily"]))
    print(container.call("__main__:Reports.render", title="Weekly"))


if __name__ == "__main__":
    main()
