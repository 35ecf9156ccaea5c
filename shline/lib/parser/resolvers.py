"""
Variable resolvers for shline.

Implements the variable sources an expansion can draw from:
- Environment: the process environment, read at lookup time
- Map: a fixed mapping captured at construction
- NotFound: knows nothing
- Disabled: echoes the reference back as `${name}`
- Panic: aborts the expansion on any lookup
- Chain: tries a sequence of resolvers in order

All resolvers are immutable; composing them builds new values. Use the
factory functions rather than the classes where possible:

    exp = resolvers_chain(expand_map({"hello": "world"}), expand_env(), expand_panic())
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Self
from shline.lib.parser.base import Resolver, UnresolvedVariableFault
from shline.models.dataModel import Lookup

NOT_FOUND: Lookup = Lookup(value="", found=False)


@dataclass(frozen=True)
class EnvResolver:
    """Resolver backed by the operating system environment."""

    def lookup(self: Self, name: str) -> Lookup:
        value: str | None = os.environ.get(name)
        if value is None:
            return NOT_FOUND
        return Lookup(value=value, found=True)


@dataclass(frozen=True)
class MapResolver:
    """Resolver backed by a fixed mapping.

    The mapping is copied on construction, so later changes to the caller's
    dict do not leak into the resolver.
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self: Self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __hash__(self: Self) -> int:
        return hash(frozenset(self.values.items()))

    def lookup(self: Self, name: str) -> Lookup:
        if name in self.values:
            return Lookup(value=self.values[name], found=True)
        return NOT_FOUND


@dataclass(frozen=True)
class NotFoundResolver:
    """Resolver that never finds anything."""

    def lookup(self: Self, name: str) -> Lookup:
        return NOT_FOUND


@dataclass(frozen=True)
class DisabledResolver:
    """Resolver that renders references instead of expanding them.

    When used directly for a Line, the expansion step is skipped entirely
    and segment text is emitted verbatim (see line_resolve). Inside a chain
    it answers `${name}` for every lookup.
    """

    def lookup(self: Self, name: str) -> Lookup:
        return Lookup(value="${" + name + "}", found=True)


@dataclass(frozen=True)
class PanicResolver:
    """Resolver that aborts the expansion.

    Place it last in a chain to make unresolved variables fatal.

    Raises:
        UnresolvedVariableFault: on every lookup
    """

    def lookup(self: Self, name: str) -> Lookup:
        raise UnresolvedVariableFault(name)


@dataclass(frozen=True)
class ChainResolver:
    """Resolver that tries its members in order.

    Attributes:
        resolvers: Members, consulted first to last
    """

    resolvers: tuple[Resolver, ...] = ()

    def lookup(self: Self, name: str) -> Lookup:
        for resolver in self.resolvers:
            result: Lookup = resolver.lookup(name)
            if result.found:
                return result
        return NOT_FOUND


def expand_env() -> Resolver:
    """Return a resolver reading the process environment."""
    return EnvResolver()


def expand_map(values: Mapping[str, str]) -> Resolver:
    """Return a resolver serving the given mapping."""
    return MapResolver(values)


def expand_notFound() -> Resolver:
    """Return a resolver that never finds the value being expanded."""
    return NotFoundResolver()


def expand_disabled() -> Resolver:
    """Return a resolver that disables variable expansion."""
    return DisabledResolver()


def expand_panic() -> Resolver:
    """Return a resolver that raises UnresolvedVariableFault when used."""
    return PanicResolver()


def resolvers_chain(*resolvers: Resolver) -> Resolver:
    """Compose resolvers so they are tried in the given order.

    You can use this to customize how key-not-found is handled. To abort
    when a name is missing from the environment:

        exp = resolvers_chain(expand_env(), expand_panic())
    """
    return ChainResolver(tuple(resolvers))
