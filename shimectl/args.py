"""Parsing of ``--name value`` style options for the command-line client."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence

__all__ = ["ArgType", "Option", "UsageError", "OptionParser"]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_USAGE_COLUMN = 20


class ArgType(Enum):
    """Kind of value an option takes."""

    BOOL = "bool"
    STRING = "string"
    STRING_LIST = "string list"
    INT = "int"
    DOUBLE = "double"

    @property
    def label(self) -> str:
        """Suffix shown after the option name in the usage text."""
        if self in (ArgType.STRING, ArgType.STRING_LIST):
            return " (string)"
        if self is ArgType.INT:
            return " (int)"
        if self is ArgType.DOUBLE:
            return " (double)"
        return ""


@dataclass(frozen=True)
class Option:
    """One accepted ``--name`` option."""

    name: str
    description: str
    type: ArgType
    required: bool = False


class UsageError(ValueError):
    """The command line does not match the accepted options."""


def _parse_int(text: str) -> int:
    stripped = text.strip()
    if not _INT_PATTERN.fullmatch(stripped):
        raise ValueError(f"not an integer: {text!r}")
    value = int(stripped)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_double(text: str) -> float:
    stripped = text.strip()
    if not stripped or "_" in stripped:
        raise ValueError(f"not a number: {text!r}")
    value = float(stripped)
    if math.isinf(value) and stripped.lstrip("+-").lower() not in ("inf", "infinity"):
        raise ValueError(f"number out of range: {text!r}")
    return value


class OptionParser:
    """Parser for the options of one client command."""

    def __init__(self, options: Iterable[Option]) -> None:
        self._options: Dict[str, Option] = {}
        for option in options:
            if option.name in self._options:
                raise ValueError(f"duplicate option: {option.name!r}")
            self._options[option.name] = option

    @property
    def options(self) -> List[Option]:
        """The accepted options, in the order they were given."""
        return list(self._options.values())

    def parse(self, args: Sequence[str]) -> Dict[str, Any]:
        """Parse the arguments that follow the command name.

        Returns a mapping from every option name to its value: ``False``
        for absent flags, ``None`` for other absent options and a list
        for options that may repeat.
        """
        values: Dict[str, Any] = {
            name: (False if option.type is ArgType.BOOL else None)
            for name, option in self._options.items()
        }
        seen = set()
        items = iter(args)
        for full_name in items:
            if not full_name.startswith("--"):
                raise UsageError(f"unexpected argument: {full_name!r}")
            name = full_name[2:]
            option = self._options.get(name)
            if option is None:
                raise UsageError(f"unknown option: {full_name!r}")
            if option.type is ArgType.BOOL:
                values[name] = True
                seen.add(name)
                continue
            try:
                raw = next(items)
            except StopIteration:
                raise UsageError(f"option {full_name!r} needs a value") from None
            try:
                if option.type is ArgType.STRING:
                    values[name] = raw
                elif option.type is ArgType.STRING_LIST:
                    if values[name] is None:
                        values[name] = []
                    values[name].append(raw)
                elif option.type is ArgType.INT:
                    values[name] = _parse_int(raw)
                else:
                    values[name] = _parse_double(raw)
            except ValueError as exc:
                raise UsageError(f"invalid value for {full_name!r}: {exc}") from None
            seen.add(name)
        missing = [
            name
            for name, option in self._options.items()
            if option.required and name not in seen
        ]
        if missing:
            raise UsageError(
                "missing required option(s): " + ", ".join(f"--{n}" for n in missing)
            )
        return values

    def usage(self, program: str, command: str) -> str:
        """Usage text listing the options of ``command``."""
        lines = [f"Usage: {program} {command} [options...]"]
        for option in self._options.values():
            label = (option.name + option.type.label).ljust(_USAGE_COLUMN)
            lines.append(f"  --{label} {option.description}")
        return "\n".join(lines) + "\n"