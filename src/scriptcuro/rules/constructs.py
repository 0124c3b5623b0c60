#!/usr/bin/env python3
"""
SCRIPTCURO CONSTRUCT RULES - Recognition Table
----------------------------------------------
The ordered registry of construct recognizers. The ConstructScanner walks
this table top to bottom and the first rule whose pattern matches wins, so
the position of a rule in the table IS its priority.

Rules gated to a dialect are skipped for every other dialect; the line
then keeps falling through to the catch-all rules at the bottom.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Sequence

from scriptcuro.core.models import ConstructKind, TargetDialect
from scriptcuro.core.settings import ConverterSettings

# First '=' that is not part of '==', '!=', '<=' or '>='.
ASSIGN_OPERATOR = re.compile(r'(?<![=!<>])=(?!=)')

# What may stand left of an assignment: optional declarator, sigil, name, subscript.
ASSIGN_TARGET = re.compile(
    r'^(?:(?:export|local|readonly|declare|typeset|my|our)\s+)?'
    r'[$@%]?[A-Za-z_]\w*(?:\[[^\]]*\]|\{[^}]*\})?$'
)

ECHO_KEYWORD = re.compile(r'^echo(?:\s|$)')
PRINT_KEYWORD = re.compile(r'^print\s')
CONDITIONAL_KEYWORD = re.compile(r'^(if|elif|elsif)\s')
FOR_KEYWORD = re.compile(r'^for\s')
WHILE_KEYWORD = re.compile(r'^while\s')
FILE_READ_COMMAND = re.compile(r'(?<![\w-])cat\s+(\S+)')
FILTER_COMMAND = re.compile(r'(?<![\w-])grep\s+(\S+)')


def split_assignment(text: str) -> Optional[Sequence[str]]:
    """
    Splits 'name=value' at the first assignment operator.
    Returns None when the left side is not an assignable name.
    """
    match = ASSIGN_OPERATOR.search(text)
    if not match:
        return None
    name = text[:match.start()].strip()
    if not ASSIGN_TARGET.match(name):
        return None
    return name, text[match.end():].strip()


def command_pattern(commands: Sequence[str]) -> Optional[re.Pattern]:
    """Whole-word matcher for any of the given command names."""
    names = [re.escape(cmd) for cmd in commands if cmd]
    if not names:
        return None
    return re.compile(r'(?<![\w-])(' + '|'.join(names) + r')(?![\w-])')


@dataclass(frozen=True)
class ConstructRule:
    """One row of the recognition table."""
    kind: ConstructKind
    matches: Callable[[str], bool]
    dialects: Optional[FrozenSet[TargetDialect]] = None   # None: every dialect

    def applies(self, text: str, dialect: TargetDialect) -> bool:
        if self.dialects is not None and dialect not in self.dialects:
            return False
        return self.matches(text)


def build_rules(settings: ConverterSettings) -> List[ConstructRule]:
    """
    Returns the recognition table in priority order.
    UNCLASSIFIED has no row: it is what the scanner reports when nothing matched.
    """
    data_only = frozenset({TargetDialect.DATA_PROCESSING})
    unsupported = command_pattern(settings.unsupported_commands)

    return [
        ConstructRule(ConstructKind.BLANK, lambda t: not t),
        ConstructRule(ConstructKind.COMMENT, lambda t: t.startswith('#')),
        ConstructRule(ConstructKind.ASSIGNMENT, lambda t: split_assignment(t) is not None),
        ConstructRule(ConstructKind.PRINT_LIKE,
                      lambda t: bool(ECHO_KEYWORD.match(t) or PRINT_KEYWORD.match(t))),
        ConstructRule(ConstructKind.CONDITIONAL, lambda t: bool(CONDITIONAL_KEYWORD.match(t))),
        ConstructRule(ConstructKind.FOR_LOOP, lambda t: bool(FOR_KEYWORD.match(t))),
        ConstructRule(ConstructKind.WHILE_LOOP, lambda t: bool(WHILE_KEYWORD.match(t))),
        ConstructRule(ConstructKind.FILE_READ, lambda t: bool(FILE_READ_COMMAND.search(t)), data_only),
        ConstructRule(ConstructKind.FILTER_COMMAND, lambda t: bool(FILTER_COMMAND.search(t)), data_only),
        ConstructRule(ConstructKind.UNSUPPORTED_COMMAND,
                      lambda t: bool(unsupported and unsupported.search(t))),
    ]
