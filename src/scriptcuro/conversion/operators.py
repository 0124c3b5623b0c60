#!/usr/bin/env python3
"""
SCRIPTCURO OPERATORS - Condition Rewriter
-----------------------------------------
Rewrites shell test syntax into Python condition syntax.

Operator tokens are located in a single regex pass and each span is
substituted exactly once, so a replacement can never be picked up again
by a later pattern.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import re

COMPARISON_OPERATORS = {
    "-eq": "==",
    "-ne": "!=",
    "-lt": "<",
    "-gt": ">",
    "-le": "<=",
    "-ge": ">=",
}

# Whole tokens only: '-eq' inside '--eqx' or 'x-eq' is left alone.
OPERATOR_PATTERN = re.compile(
    r'(?<![\w-])(' + '|'.join(re.escape(op) for op in COMPARISON_OPERATORS) + r')(?![\w-])'
)

# Trailing body openers: 'then', 'do', '{' and ';' separators, in any mix.
# Keywords only count when whitespace separates them from the condition.
BODY_OPENER_WORDS = ("then", "do")
BODY_OPENER_MARKS = ";{"

INNER_BRACKET_PATTERN = re.compile(r'\s\]|\[\s')


def rewrite_operators(condition: str) -> str:
    """Maps -eq/-ne/-lt/-gt/-le/-ge to ==/!=/</>/<=/>= in one pass."""
    return OPERATOR_PATTERN.sub(lambda m: COMPARISON_OPERATORS[m.group(1)], condition)


def _skip_space(text: str, end: int) -> int:
    while end and text[end - 1].isspace():
        end -= 1
    return end


def _trailing_word(text: str, end: int):
    for word in BODY_OPENER_WORDS:
        start = end - len(word)
        if start > 0 and text.endswith(word, 0, end) and text[start - 1].isspace():
            return word
    return None


def strip_body_opener(text: str) -> str:
    """'$x -lt 3 ]; do' -> '$x -lt 3 ]'"""
    end = _skip_space(text, len(text))
    while end:
        if text[end - 1] in BODY_OPENER_MARKS:
            end = _skip_space(text, end - 1)
            continue
        word = _trailing_word(text, end)
        if word is None:
            break
        end = _skip_space(text, end - len(word))
    return text[:end].strip()


def strip_test_brackets(condition: str) -> str:
    condition = condition.strip()
    if not (condition.startswith('[') and condition.endswith(']')):
        return condition
    opening = 2 if condition.startswith('[[') else 1
    closing = 2 if condition.endswith(']]') else 1
    inner = condition[opening:len(condition) - closing].strip()
    # Chained tests like "[ a ] && [ b ]" keep their brackets.
    if INNER_BRACKET_PATTERN.search(inner):
        return condition
    return inner


def normalize_condition(condition: str) -> str:
    """Full condition pipeline used by if/elif/while headers."""
    return rewrite_operators(strip_test_brackets(strip_body_opener(condition)))
