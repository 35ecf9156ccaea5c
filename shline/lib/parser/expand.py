"""
Line resolution: turns a tokenized Line into final argument strings.
"""

from shline.lib.parser.base import Resolver, argument_expand
from shline.lib.parser.line import argument_text
from shline.lib.parser.resolvers import DisabledResolver
from shline.models.dataModel import Line


def expansion_isDisabled(resolver: Resolver) -> bool:
    """Whether `resolver` switches expansion off for a whole Line."""
    return isinstance(resolver, DisabledResolver)


def line_resolve(line: Line, resolver: Resolver) -> list[str]:
    """Resolve every argument of `line` against `resolver`.

    With a disabled resolver no reference scanning happens at all: each
    argument is the concatenation of its segments' raw text.

    Args:
        line: Tokenized command line
        resolver: Source of variable values

    Returns:
        One string per Argument, in order

    Raises:
        UnresolvedVariableFault: if the resolver aborts a lookup
    """
    if expansion_isDisabled(resolver):
        return [argument_text(arg) for arg in line]
    return [argument_expand(arg, resolver) for arg in line]
