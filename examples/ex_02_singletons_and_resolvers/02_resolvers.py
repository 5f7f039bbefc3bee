"""Custom resolvers.

Resolvers are asked first on every ``make`` call, so overrides can be
switched on and off without touching the registry.
"""

from typing import Any

from phiwire import NO_OPINION, Arguments, Container


class Mailer:
    def send(self, to: str) -> str:
        return f"sent to {to}"


class FakeMailer(Mailer):
    def send(self, to: str) -> str:
        return f"pretended to send to {to}"


class TestingResolver:
    def __init__(self) -> None:
        self.enabled = False

    def make(self, alias: Any, arguments: Arguments) -> Any:
        if self.enabled and alias is Mailer:
            return FakeMailer()
        return NO_OPINION


def main() -> None:
    container = Container()
    resolver = TestingResolver()
    container.add_resolver(resolver)

    print(container.make(Mailer).send("bob"))
    resolver.enabled = True
    print(container.make(Mailer).send("bob"))


if __name__ == "__main__":
    main()
