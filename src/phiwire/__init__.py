from phiwire.arguments import Arguments
from phiwire.bindings import Factory, Instance, Redirect
from phiwire.container import Container
from phiwire.exceptions import (
    CallableSpecError,
    CircularDependencyError,
    InstantiationError,
    InvalidAliasError,
    PhiwireError,
    ResolutionStep,
)
from phiwire.lock_mode import LockMode
from phiwire.resolvers import NO_OPINION, Resolver
from phiwire.values import Value

__all__ = [
    "NO_OPINION",
    "Arguments",
    "CallableSpecError",
    "CircularDependencyError",
    "Container",
    "Factory",
    "Instance",
    "InstantiationError",
    "InvalidAliasError",
    "LockMode",
    "PhiwireError",
    "Redirect",
    "ResolutionStep",
    "Resolver",
    "Value",
]
