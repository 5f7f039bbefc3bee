"""Binding aliases and making values.

Demonstrates:
1. Building a class whose constructor dependencies are auto-injected
2. Binding a symbolic alias to a class, a factory and an instance
3. Mixing named and positional caller arguments
"""

from phiwire import Container


class Config:
    def __init__(self) -> None:
        self.dsn = "sqlite://"


class Database:
    def __init__(self, config: Config) -> None:
        self.config = config


class Repository:
    def __init__(self, db: Database, table, page_size: int = 50) -> None:  # noqa: ANN001
        self.db = db
        self.table = table
        self.page_size = page_size


def main() -> None:
    container = Container()

    repository = container.make(Repository, ["users"])
    print(f"table={repository.table} dsn={repository.db.config.dsn}")

    container.bind("db.helper", Database)
    container.bind("greeting", lambda name: f"Hello, {name}")
    container.bind("config", Config())

    print(type(container.make("db.helper")).__name__)
    print(container.make("greeting", ["phiwire"]))
    print(container.make("config") is container.make("config"))

    paged = container.make(Repository, ["orders"], page_size=10)
    print(f"table={paged.table} page_size={paged.page_size}")


if __name__ == "__main__":
    main()
