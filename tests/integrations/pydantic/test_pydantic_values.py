"""Tests for pydantic models as value wrappers and constructible classes."""

import pytest
from pydantic import BaseModel, ConfigDict, RootModel, ValidationError

from phiwire.container import Container
from phiwire.exceptions import InstantiationError
from phiwire.values import is_value_wrapper_type
from tests.stubs import A


class Port(RootModel[int]):
    pass


class Hostname(RootModel[str]):
    pass


class Server:
    def __init__(self, host: Hostname, port: Port, a: A) -> None:
        self.host = host
        self.port = port
        self.a = a


class ServiceSettings(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    a: A
    retries: int = 3


class TestRootModelValues:
    def test_root_model_is_value_wrapper(self) -> None:
        assert is_value_wrapper_type(Port)
        assert not is_value_wrapper_type(ServiceSettings)

    def test_root_models_wrap_caller_scalars(self, container: Container) -> None:
        server = container.make(Server, ["localhost", "8080"])

        assert server.host.root == "localhost"
        assert server.port.root == 8080
        assert isinstance(server.a, A)

    def test_ready_made_root_model_matched_by_type(self, container: Container) -> None:
        port = Port(443)

        server = container.make(Server, [port, "example.com"])

        assert server.port is port
        assert server.host.root == "example.com"

    def test_validation_error_is_wrapped(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Server, ["localhost", "not a port"])

        assert exc_info.value.aliases == (Server, Port)
        assert isinstance(exc_info.value.root_cause, ValidationError)


class TestBaseModelConstruction:
    def test_fields_are_filled_and_injected(self, container: Container) -> None:
        settings = container.make(ServiceSettings, {"name": "svc"})

        assert settings.name == "svc"
        assert isinstance(settings.a, A)
        assert settings.retries == 3

    def test_positional_scalars_fill_keyword_fields(self, container: Container) -> None:
        settings = container.make(ServiceSettings, ["svc", 5])

        assert settings.name == "svc"
        assert settings.retries == 5

    def test_missing_field_is_wrapped(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(ServiceSettings)

        assert exc_info.value.aliases == (ServiceSettings,)
        assert isinstance(exc_info.value.root_cause, ValidationError)
