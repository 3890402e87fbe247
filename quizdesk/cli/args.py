"""
Command argument parsing.

One input line (verb already removed) is split on whitespace into
positional arguments and flags:

    -g quiz -o out.txt extra   ->  flags={"g": "quiz", "o": "out.txt"}, positional=["extra"]
    -v -g quiz                 ->  flags={"v": "", "g": "quiz"}
    -o=report.txt              ->  flags={"o": "report.txt"}

There is no quoting. Parsing never fails; odd input just parses oddly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class CommandArgs:
    """Parsed arguments of one command invocation."""

    positional: tuple[str, ...] = ()
    flags: Mapping[str, str] = field(default_factory=dict)
    raw_tokens: tuple[str, ...] = ()

    def has_flag(self, name: str) -> bool:
        return name in self.flags

    def flag(self, name: str, default: str = "") -> str:
        return self.flags.get(name, default)

    @classmethod
    def parse(cls, line: str) -> CommandArgs:
        return parse_args(line.split())


def parse_args(tokens: list[str] | tuple[str, ...]) -> CommandArgs:
    """Parse tokens into positional arguments and flags. Last flag occurrence wins."""
    positional: list[str] = []
    flags: dict[str, str] = {}
    pending: str | None = None

    for token in tokens:
        if token.startswith("-"):
            # The previous flag had no value
            if pending is not None:
                flags[pending] = ""
                pending = None

            name = token[1:]
            if "=" in name:
                name, _, value = name.partition("=")
                flags[name] = value
            else:
                pending = name
        elif pending is not None:
            flags[pending] = token
            pending = None
        else:
            positional.append(token)

    if pending is not None:
        flags[pending] = ""

    return CommandArgs(
        positional=tuple(positional),
        flags=MappingProxyType(flags),
        raw_tokens=tuple(tokens),
    )
