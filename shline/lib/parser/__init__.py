"""
Parser package for shline.

Provides the shell-like tokenizer and the variable expansion engine with its
composable resolvers.
"""

from .base import Resolver, UnresolvedVariableFault, argument_expand, text_expand
from .expand import expansion_isDisabled, line_resolve
from .line import argument_text, line_fromArgs, line_parse
from .resolvers import (
    ChainResolver,
    DisabledResolver,
    EnvResolver,
    MapResolver,
    NotFoundResolver,
    PanicResolver,
    expand_disabled,
    expand_env,
    expand_map,
    expand_notFound,
    expand_panic,
    resolvers_chain,
)

__all__ = [
    "Resolver",
    "UnresolvedVariableFault",
    "argument_expand",
    "text_expand",
    "expansion_isDisabled",
    "line_resolve",
    "argument_text",
    "line_fromArgs",
    "line_parse",
    "ChainResolver",
    "DisabledResolver",
    "EnvResolver",
    "MapResolver",
    "NotFoundResolver",
    "PanicResolver",
    "expand_disabled",
    "expand_env",
    "expand_map",
    "expand_notFound",
    "expand_panic",
    "resolvers_chain",
]
