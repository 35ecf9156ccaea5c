r"""
Variable reference expansion for shline.

Provides the resolver capability and the fixed reference grammar used to
substitute variables inside expandable segments.

The grammar handles:
- `${name}`: braced reference, name is everything up to the first `}`
- `$name`: bare reference, greedy over ASCII letters, digits and underscore
- A `$` not followed by `{` or an identifier character is literal
- `${` without a closing `}`, and the empty `${}`, are literal

Unknown names expand to the empty string. A resolver may instead abort the
whole expansion by raising UnresolvedVariableFault.

Example:
    text_expand("Value is ${var}", expand_map({"var": "42"}))
    -> "Value is 42"
"""

import re
from typing import Final, Protocol, Self, runtime_checkable
from shline.models.dataModel import Argument, Lookup

REFERENCE: Final[re.Pattern[str]] = re.compile(
    r"\$(?:\{(?P<braced>[^}]+)\}|(?P<bare>[A-Za-z0-9_]+))"
)


@runtime_checkable
class Resolver(Protocol):
    """Protocol defining a variable source.

    Resolvers answer a single question: what is the value of `name`? They
    return a Lookup whose `found` flag tells a real (possibly empty) value
    apart from an unknown name.
    """

    def lookup(self: Self, name: str) -> Lookup:
        """Resolve a variable name.

        Args:
            name: Variable name, without `$` or braces

        Returns:
            Lookup(value, found)
        """
        ...


class UnresolvedVariableFault(BaseException):
    """Raised when a variable must resolve but cannot.

    Derives from BaseException so that `except Exception` handlers do not
    turn it into an ordinary error result; the expansion is aborted.

    Attributes:
        name: The variable that could not be resolved
    """

    def __init__(self: Self, name: str) -> None:
        super().__init__(f"can not find value to expand '${{{name}}}'")
        self.name: str = name


def text_expand(text: str, resolver: Resolver) -> str:
    """Replace every variable reference in `text`.

    Args:
        text: Text of an expandable segment
        resolver: Source of variable values

    Returns:
        Text with references replaced by their values, or by "" when the
        resolver does not know the name
    """
    if "$" not in text:
        return text

    def substitute(match: re.Match[str]) -> str:
        name: str = match.group("braced") or match.group("bare")
        value, found = resolver.lookup(name)
        return value if found else ""

    return REFERENCE.sub(substitute, text)


def argument_expand(arg: Argument, resolver: Resolver) -> str:
    """Expand one argument into its final string.

    Non-expandable segments are emitted verbatim; expandable ones go through
    text_expand. The results are concatenated with no separator.
    """
    return "".join(
        text_expand(segment.text, resolver) if segment.expandable else segment.text
        for segment in arg
    )
