"""Instantiation failure chains.

When a nested dependency cannot be built, every level of the resolution
wraps the failure, so the error names the whole path.
"""

from phiwire import Container, InstantiationError, InvalidAliasError


class Settings:
    def __init__(self, path) -> None:  # noqa: ANN001
        self.path = path


class Storage:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings


class Uploader:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage


def main() -> None:
    container = Container()

    try:
        container.make(Uploader)
    except InstantiationError as e:
        print(e)
        print(f"  path: {[alias.__name__ for alias in e.aliases]}")
        print(f"  root cause: {type(e.root_cause).__name__}")

    try:
        container.make("not.a.real.Class")
    except InvalidAliasError as e:
        print(f"InvalidAliasError: {e}")

    container.bind(Settings, lambda: Settings("/tmp/uploads"))
    print(container.make(Uploader).storage.settings.path)


if __name__ == "__main__":
    main()
