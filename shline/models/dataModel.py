"""
dataModel.py

This module defines the data models used throughout shline.
The models leverage Pydantic for validation and immutability.

Features:
- Segment, Argument and Line: the tokenizer's output shape
- Lookup: the answer a resolver gives for one variable name
- ExecResult and CommandSpec: what the command builder hands back

Usage:
Import these models to structure data passed between the tokenizer, the
expansion engine and the command builder.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import NamedTuple, Optional


class Segment(BaseModel):
    """A literal-or-expandable text fragment within one argument.

    Attributes:
        text: The fragment's raw text, quotes already stripped
        expandable: Whether variable references in `text` are resolved
    """

    model_config = ConfigDict(frozen=True)

    text: str
    expandable: bool


# One final command-line argument, built from one or more segments.
Argument = tuple[Segment, ...]

# The full tokenized result of one raw input string.
Line = tuple[Argument, ...]


class Lookup(NamedTuple):
    """Result of resolving a single variable name.

    Attributes:
        value: The resolved value (empty when not found)
        found: Whether the resolver knows the name
    """

    value: str
    found: bool


class CommandSpec(BaseModel):
    """Everything needed to launch a process.

    Attributes:
        argv: Fully expanded arguments; argv[0] is the executable
        cwd: Working directory, None for the current one
        env: Complete environment for the child process
    """

    argv: list[str]
    cwd: Optional[str] = None
    env: dict[str, str] = Field(default_factory=dict)


class ExecResult(BaseModel):
    """Outcome of running a command.

    Attributes:
        exit_code: Process return code, or 1 when it could not be launched
        error: Description of the failure, if any
    """

    exit_code: int
    error: str | None = None
