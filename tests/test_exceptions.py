"""Tests for instantiation failure chains and the exception hierarchy."""

import pytest

from phiwire.arguments import Arguments
from phiwire.container import Container
from phiwire.exceptions import (
    CallableSpecError,
    CircularDependencyError,
    InstantiationError,
    InvalidAliasError,
    PhiwireError,
    ResolutionStep,
)
from tests.stubs import HintedList, Nested, Outer, Unhinted, Uninstantiable


class Chicken:
    def __init__(self, egg: "Egg") -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


class Leaf:
    pass


class Branch:
    def __init__(self, leaf: Leaf) -> None:
        self.leaf = leaf


class NeedsAbstract:
    def __init__(self, dependency: Uninstantiable) -> None:
        self.dependency = dependency


class TestInstantiationBacktrace:
    def test_missing_unhinted_param(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Unhinted)

        assert exc_info.value.alias is Unhinted
        assert not exc_info.value.arguments
        assert isinstance(exc_info.value.cause, TypeError)

    def test_missing_hinted_builtin_param(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(HintedList)

        assert exc_info.value.alias is HintedList
        assert exc_info.value.aliases == (HintedList,)

    def test_nested_missing_hinted_param(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Outer)

        error = exc_info.value
        assert error.aliases == (Outer, Nested, HintedList)
        assert isinstance(error.cause, InstantiationError)
        assert error.cause.alias is Nested
        assert not error.arguments
        assert isinstance(error.root_cause, TypeError)
        assert "items" in str(error.root_cause)

    def test_message_reads_as_alias_chain(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Outer)

        message = str(exc_info.value)
        assert message.startswith("An error occurred while instantiating Outer -> Nested -> HintedList: ")
        assert "TypeError" in message

    def test_caller_arguments_are_recorded(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Outer, ["unused"])

        path = exc_info.value.path
        assert path[0] == ResolutionStep(Outer, Arguments(((0, "unused"),)))
        assert path[1].alias is Nested
        assert not path[1].arguments

    def test_python_cause_is_set(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Nested)

        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_chain_walks_every_node(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Outer)

        nodes = list(exc_info.value.chain())
        assert [node.alias for node in nodes] == [Outer, Nested, HintedList]
        assert all(isinstance(node, InstantiationError) for node in nodes)

    def test_nested_invalid_alias_is_wrapped(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(NeedsAbstract)

        assert exc_info.value.aliases == (NeedsAbstract,)
        assert isinstance(exc_info.value.root_cause, InvalidAliasError)

    def test_alias_through_redirect_is_recorded(self, container: Container) -> None:
        container.bind("outer", Outer)

        with pytest.raises(InstantiationError) as exc_info:
            container.make("outer")

        assert exc_info.value.aliases == (Outer, Nested, HintedList)

    def test_failed_build_yields_no_instance(self, container: Container) -> None:
        built: list[object] = []

        class Recorder:
            def __init__(self, hinted: HintedList) -> None:
                built.append(self)

        with pytest.raises(InstantiationError):
            container.make(Recorder)

        assert built == []


class TestCircularDependency:
    def test_cycle_is_reported(self, container: Container) -> None:
        with pytest.raises(InstantiationError) as exc_info:
            container.make(Chicken)

        root = exc_info.value.root_cause
        assert isinstance(root, CircularDependencyError)
        assert root.stack[0] == root.stack[-1]
        assert exc_info.value.aliases == (Chicken, Egg)

    def test_building_stack_is_per_container(self, container: Container) -> None:
        other = Container()
        container.bind(Leaf, lambda: other.make(Branch).leaf)

        branch = container.make(Branch)

        assert isinstance(branch.leaf, Leaf)


class TestExceptionHierarchy:
    def test_invalid_alias_is_phiwire_error(self) -> None:
        error = InvalidAliasError("alias", "is not a class")

        assert isinstance(error, PhiwireError)
        assert isinstance(error, ValueError)
        assert str(error) == "'alias' is not a class"

    def test_callable_spec_error_is_invalid_alias_error(self) -> None:
        assert issubclass(CallableSpecError, InvalidAliasError)

    def test_instantiation_error_is_phiwire_error(self) -> None:
        error = InstantiationError("alias", Arguments(), ValueError("bad"))

        assert isinstance(error, PhiwireError)
        assert str(error) == "An error occurred while instantiating alias: ValueError: bad"

    def test_circular_dependency_error_is_phiwire_error(self) -> None:
        error = CircularDependencyError(("a", "b", "a"))

        assert isinstance(error, PhiwireError)
        assert "a -> b -> a" in str(error)
