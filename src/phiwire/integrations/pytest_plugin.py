from __future__ import annotations

import pytest

from phiwire.container import Container


@pytest.fixture()
def phiwire_container() -> Container:
    """Create a per-test container.

    The fixture is function-scoped, so bindings, singletons and resolvers are
    isolated between tests unless users override the fixture scope.

    Returns:
        A new ``Container`` instance.

    """
    return Container()
