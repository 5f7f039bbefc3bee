from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from phiwire.signatures import ParameterDescriptor
from phiwire.type_checks import is_instance_of
from phiwire.values import is_value_wrapper_type

ArgumentKey = str | int


@dataclass(frozen=True, slots=True)
class Arguments:
    """An ordered, partially-named list of caller-supplied arguments.

    Entries keyed by a ``str`` are named and matched to parameters by name;
    entries keyed by an ``int`` are positional and consumed left to right.
    """

    entries: tuple[tuple[ArgumentKey, Any], ...] = ()

    @classmethod
    def of(
        cls,
        arguments: Arguments | Sequence[Any] | Mapping[ArgumentKey, Any] | None = None,
        named: Mapping[str, Any] | None = None,
    ) -> Arguments:
        """Normalize a sequence, mapping or ``Arguments`` plus extra named values.

        Extra named values are appended after the base arguments, replacing any
        entry with the same name.
        """
        if isinstance(arguments, Arguments) and not named:
            return arguments

        if arguments is None:
            entries: list[tuple[ArgumentKey, Any]] = []
        elif isinstance(arguments, Arguments):
            entries = list(arguments.entries)
        elif isinstance(arguments, Mapping):
            entries = list(arguments.items())
        elif isinstance(arguments, (str, bytes)):
            msg = f"Arguments must be a sequence or mapping, not {type(arguments).__name__}"
            raise TypeError(msg)
        else:
            entries = list(enumerate(arguments))

        if named:
            entries = [(key, value) for key, value in entries if key not in named]
            entries.extend(named.items())
        return cls(tuple(entries))

    @property
    def positional(self) -> tuple[Any, ...]:
        return tuple(value for key, value in self.entries if not isinstance(key, str))

    @property
    def named(self) -> dict[str, Any]:
        return {key: value for key, value in self.entries if isinstance(key, str)}

    def values(self) -> tuple[Any, ...]:
        return tuple(value for _, value in self.entries)

    def __iter__(self) -> Iterator[tuple[ArgumentKey, Any]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


EMPTY_ARGUMENTS = Arguments()


@dataclass(frozen=True, slots=True)
class InvocationArguments:
    """Arguments ready to be splatted into a constructor or callable."""

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_caller(cls, arguments: Arguments) -> InvocationArguments:
        return cls(arguments.positional, arguments.named)

    def invoke(self, target: Any) -> Any:
        return target(*self.args, **self.kwargs)


class MakeFunction(Protocol):
    def __call__(self, alias: Any, arguments: Any = ..., /) -> Any: ...


class ArgumentBuilder:
    """Fill a parameter list from caller arguments and auto-injected dependencies.

    The fill runs in three phases over a shared pool of caller arguments. Each
    pool value is consumed at most once.

    1. Named entries are assigned to the first parameter with the same name.
    2. Typed parameters take the first remaining value that is an instance of
       their declared type, regardless of its position.
    3. Remaining parameters are filled in declaration order. Value wrapper
       types wrap the next remaining value, other required typed parameters
       are built through ``make``, untyped parameters take the next remaining
       value. Optional typed parameters with nothing to take are left to their
       defaults.

    For example, with parameters ``(a: A, b: B, s: str, b2: B, t: str)`` and
    arguments ``[B(), B(), "x", t="y"]`` phase 1 fills ``t``, phase 2 fills
    ``b`` and ``b2``, and phase 3 builds ``a`` and hands ``"x"`` to ``s``.
    """

    def __init__(self, make: MakeFunction) -> None:
        self._make = make

    def build(
        self,
        parameters: Sequence[ParameterDescriptor],
        arguments: Arguments,
    ) -> InvocationArguments:
        pool: list[tuple[ArgumentKey, Any]] = list(arguments.entries)
        slots: dict[int, Any] = {}

        self._match_named(parameters, pool, slots)
        self._match_by_type(parameters, pool, slots)
        self._fill_remaining(parameters, pool, slots)

        return self._order(parameters, slots)

    def _match_named(
        self,
        parameters: Sequence[ParameterDescriptor],
        pool: list[tuple[ArgumentKey, Any]],
        slots: dict[int, Any],
    ) -> None:
        consumed: set[int] = set()
        for index, (key, value) in enumerate(pool):
            if not isinstance(key, str):
                continue
            for parameter in parameters:
                if parameter.name == key:
                    slots[parameter.position] = value
                    consumed.add(index)
                    break
        pool[:] = [entry for index, entry in enumerate(pool) if index not in consumed]

    def _match_by_type(
        self,
        parameters: Sequence[ParameterDescriptor],
        pool: list[tuple[ArgumentKey, Any]],
        slots: dict[int, Any],
    ) -> None:
        for parameter in parameters:
            if parameter.position in slots or parameter.declared_type is None:
                continue
            for index, (_, value) in enumerate(pool):
                if is_instance_of(value, parameter.declared_type):
                    slots[parameter.position] = value
                    del pool[index]
                    break

    def _fill_remaining(
        self,
        parameters: Sequence[ParameterDescriptor],
        pool: list[tuple[ArgumentKey, Any]],
        slots: dict[int, Any],
    ) -> None:
        for parameter in parameters:
            if parameter.position in slots:
                continue

            declared_type = parameter.declared_type
            if declared_type is None:
                if pool:
                    slots[parameter.position] = pool.pop(0)[1]
                continue

            if is_value_wrapper_type(declared_type) and pool:
                slots[parameter.position] = self._make(declared_type, [pool.pop(0)[1]])
            elif not parameter.is_optional:
                slots[parameter.position] = self._make(declared_type)

    def _order(
        self,
        parameters: Sequence[ParameterDescriptor],
        slots: dict[int, Any],
    ) -> InvocationArguments:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        by_keyword = False
        for parameter in sorted(parameters, key=lambda p: p.position):
            if parameter.position not in slots:
                if parameter.is_keyword_only:
                    continue
                if parameter.is_positional_only and parameter.is_optional and not by_keyword:
                    args.append(parameter.default)
                    continue
                by_keyword = True
                continue

            value = slots[parameter.position]
            if parameter.is_keyword_only or (by_keyword and not parameter.is_positional_only):
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return InvocationArguments(tuple(args), kwargs)


__all__ = [
    "EMPTY_ARGUMENTS",
    "ArgumentBuilder",
    "ArgumentKey",
    "Arguments",
    "InvocationArguments",
]
