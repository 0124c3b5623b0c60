#!/usr/bin/env python3
"""
SCRIPTCURO TRANSLATOR - The Surgeon (Phase 1.3)
-----------------------------------------------
Turns one classified SourceLine into target-language lines plus at most
one Diagnostic. Every ConstructKind has exactly one handler; the function
is total, so an unrecognized line degrades to a comment and a warning
instead of an error.

Author: ScriptCuro Team
Date: 2026-10-19
"""

from typing import Callable, Dict, Optional
from scriptcuro.core.models import (
    ConstructKind, Diagnostic, SourceLine, TargetDialect, TranslationOutcome
)
from scriptcuro.core.settings import ConverterSettings
from scriptcuro.conversion.operators import normalize_condition, strip_body_opener
from scriptcuro.conversion.scanner import ConstructScanner
from scriptcuro.rules.constructs import (
    CONDITIONAL_KEYWORD, ECHO_KEYWORD, FILE_READ_COMMAND, FILTER_COMMAND,
    FOR_KEYWORD, PRINT_KEYWORD, WHILE_KEYWORD, command_pattern, split_assignment
)

# Perl spells it 'elsif', shell spells it 'elif'; Python only knows 'elif'.
CONDITIONAL_SPELLING = {"if": "if", "elif": "elif", "elsif": "elif"}


def _unquote(token: str) -> str:
    """Drops trailing separators and one pair of surrounding quotes."""
    token = token.rstrip(';|&)')
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ('"', "'"):
        return token[1:-1]
    return token


def _string_literal(value: str) -> str:
    """Double-quoted Python literal; backslashes and quotes are escaped."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _payload(text: str) -> str:
    """Print payload without the statement separator."""
    text = text.strip()
    return text[:-1].rstrip() if text.endswith(';') else text


class LineTranslator:
    """
    Dispatches each line to the handler bound to its ConstructKind.
    Stateless between calls: outcomes depend only on (line, dialect).
    """

    def __init__(self, settings: Optional[ConverterSettings] = None,
                 scanner: Optional[ConstructScanner] = None):
        self.settings = settings or ConverterSettings()
        self.scanner = scanner or ConstructScanner(self.settings)
        self._unsupported = command_pattern(self.settings.unsupported_commands)
        self._handlers: Dict[ConstructKind, Callable[[SourceLine], TranslationOutcome]] = {
            ConstructKind.BLANK: self._passthrough,
            ConstructKind.COMMENT: self._passthrough,
            ConstructKind.ASSIGNMENT: self._translate_assignment,
            ConstructKind.PRINT_LIKE: self._translate_print,
            ConstructKind.CONDITIONAL: self._translate_conditional,
            ConstructKind.FOR_LOOP: self._translate_for,
            ConstructKind.WHILE_LOOP: self._translate_while,
            ConstructKind.FILE_READ: self._translate_file_read,
            ConstructKind.FILTER_COMMAND: self._translate_filter,
            ConstructKind.UNSUPPORTED_COMMAND: self._translate_unsupported,
            ConstructKind.UNCLASSIFIED: self._translate_fallback,
        }

    def translate_line(self, line: SourceLine, dialect: TargetDialect) -> TranslationOutcome:
        kind = self.scanner.classify(line, dialect)
        return self._handlers[kind](line)

    # --- Passthrough ---

    def _passthrough(self, line: SourceLine) -> TranslationOutcome:
        kind = ConstructKind.BLANK if not line.text else ConstructKind.COMMENT
        return TranslationOutcome(kind, (line.raw,))

    # --- Statements ---

    def _translate_assignment(self, line: SourceLine) -> TranslationOutcome:
        name, value = split_assignment(line.text)
        return TranslationOutcome(ConstructKind.ASSIGNMENT, (f"{name} = {value}",))

    def _translate_print(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        # 'echo ' and 'print ' differ in prefix length; the match knows which.
        keyword = ECHO_KEYWORD.match(text) or PRINT_KEYWORD.match(text)
        content = _payload(text[keyword.end():])
        return TranslationOutcome(ConstructKind.PRINT_LIKE, (f"print({content})",))

    # --- Block headers ---

    def _translate_conditional(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        match = CONDITIONAL_KEYWORD.match(text)
        keyword = CONDITIONAL_SPELLING[match.group(1)]
        condition = normalize_condition(text[match.end():])
        return TranslationOutcome(ConstructKind.CONDITIONAL, (f"{keyword} {condition}:",))

    def _translate_for(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        if ' in ' not in text:
            # C-style 'for ((i=0; ...))' has no direct equivalent.
            return TranslationOutcome(
                ConstructKind.FOR_LOOP,
                (f"# {text} - Manual conversion required",),
                Diagnostic.warning(line.line_no, f"Complex for loop requires manual review: {text}")
            )

        head, iterable = text.split(' in ', 1)
        var_name = FOR_KEYWORD.sub('', head, count=1).strip()
        iterable = strip_body_opener(iterable)
        return TranslationOutcome(ConstructKind.FOR_LOOP, (f"for {var_name} in {iterable}:",))

    def _translate_while(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        match = WHILE_KEYWORD.match(text)
        condition = normalize_condition(text[match.end():])
        return TranslationOutcome(ConstructKind.WHILE_LOOP, (f"while {condition}:",))

    # --- Dataframe commands (DATA_PROCESSING only) ---

    def _translate_file_read(self, line: SourceLine) -> TranslationOutcome:
        filename = _unquote(FILE_READ_COMMAND.search(line.text).group(1))
        s = self.settings
        return TranslationOutcome(
            ConstructKind.FILE_READ,
            (f'{s.dataframe_name} = {s.session_name}.read.csv({_string_literal(filename)}, header={s.csv_header})',)
        )

    def _translate_filter(self, line: SourceLine) -> TranslationOutcome:
        pattern = _unquote(FILTER_COMMAND.search(line.text).group(1))
        df = self.settings.dataframe_name
        return TranslationOutcome(
            ConstructKind.FILTER_COMMAND,
            (f'{df}.filter({df}.value.contains({_string_literal(pattern)}))',)
        )

    # --- Catch-alls ---

    def _translate_unsupported(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        command = self._unsupported.search(text).group(1)
        return TranslationOutcome(
            ConstructKind.UNSUPPORTED_COMMAND,
            (f"# Unsupported construct: {text}", f'# Log: "Unsupported construct: {command}"'),
            Diagnostic.unsupported(line.line_no, f"{command.upper()} command: {text}")
        )

    def _translate_fallback(self, line: SourceLine) -> TranslationOutcome:
        text = line.text
        return TranslationOutcome(
            ConstructKind.UNCLASSIFIED,
            (f"# {text}",),
            Diagnostic.warning(line.line_no, f"Line may need manual conversion: {text}")
        )
