"""Lazy singletons.

A singleton is realized on first ``make`` with the arguments given at
registration time, then the same instance is returned for every later call.
"""

from phiwire import Container


class Connection:
    opened = 0

    def __init__(self, url) -> None:  # noqa: ANN001
        Connection.opened += 1
        self.url = url


def main() -> None:
    container = Container()
    container.singleton("db", Connection, ["postgres://localhost/app"])

    print(f"opened before make: {Connection.opened}")
    first = container.make("db")
    second = container.make("db")
    print(f"same instance: {first is second}, opened: {Connection.opened}")

    container.bind("primary", "db")
    print(f"alias chain reaches singleton: {container.make('primary') is first}")


if __name__ == "__main__":
    main()
