"""Shared pytest fixtures for phiwire tests."""

import pytest

from phiwire.container import Container
from phiwire.lock_mode import LockMode
from phiwire.signatures import SignatureInspector


@pytest.fixture()
def container() -> Container:
    """Default container with thread locking and itself bound."""
    return Container()


@pytest.fixture()
def unlocked_container() -> Container:
    """Container without registry locking."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def signature_inspector() -> SignatureInspector:
    """SignatureInspector instance."""
    return SignatureInspector()
