"""
Block boundary resolution for the pseudocode interpreter.
Finds matching terminators for Mientras, Para, Si and Segun blocks, the
branch keywords of Si blocks and the case groups of Segun blocks.
"""

import re

from .utils import parse_leading_number

# Regex patterns for block headers and terminators (matched on trimmed lines)
HEADER_WHILE = re.compile(r'^mientras\s', re.I)
HEADER_FOR = re.compile(r'^para\s', re.I)
HEADER_IF = re.compile(r'^si\s.*\bentonces\b', re.I)
HEADER_ELSEIF = re.compile(r'^sino\s+si\s', re.I)
HEADER_ELSE = re.compile(r'^sino$', re.I)
HEADER_SWITCH = re.compile(r'^segun\s', re.I)
HEADER_CASE = re.compile(r'^([\w\s,\'".+-]+):$')
HEADER_DEFAULT = re.compile(r'^de\s+otro\s+modo\b', re.I)
TOKEN_END_WHILE = re.compile(r'^fin\s*mientras\b', re.I)
TOKEN_END_FOR = re.compile(r'^fin\s*para\b', re.I)
TOKEN_END_IF = re.compile(r'^fin\s*si$', re.I)
TOKEN_END_SWITCH = re.compile(r'^fin\s*segun\b', re.I)

BLOCK_FAMILIES = {
    'mientras': (HEADER_WHILE, TOKEN_END_WHILE),
    'para': (HEADER_FOR, TOKEN_END_FOR),
    'si': (HEADER_IF, TOKEN_END_IF),
    'segun': (HEADER_SWITCH, TOKEN_END_SWITCH),
}


def parse_case_values(text):
    """Split a case label ('1, 2' or '"a", b') into numbers and strings."""
    values = []
    for raw in text.split(','):
        value = raw.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
            values.append(value[1:-1])
            continue
        number = parse_leading_number(value)
        if number is not None:
            values.append(int(number) if number.is_integer() else number)
        else:
            values.append(value)
    return values


class IfBlock:
    def __init__(self, terminator, else_index, clauses):
        self.terminator = terminator  # Index of the FinSi line
        self.else_index = else_index  # First SiNo / SiNo Si at depth 1, or None
        self.clauses = clauses        # All (kind, index) branch lines at depth 1


class SwitchBlock:
    def __init__(self, terminator, cases, default):
        self.terminator = terminator
        self.cases = cases      # List of (values, start, end)
        self.default = default  # (start, end) or None


class BlockResolver:
    """Scans forward from a block header counting nested blocks of the same family."""

    def __init__(self, lines):
        self.lines = lines  # List of SourceLine

    def _text(self, index):
        return self.lines[index].text

    def find_block_end(self, family, start_index):
        """
        Find the terminator of the block opened at start_index.
        Returns the terminator index, or len(lines) when the block is never closed.
        """
        header, terminator = BLOCK_FAMILIES[family]
        depth = 1
        for i in range(start_index + 1, len(self.lines)):
            text = self._text(i)
            if header.match(text):
                depth += 1
            elif terminator.match(text):
                depth -= 1
                if depth == 0:
                    return i
        return len(self.lines)

    def resolve_if(self, start_index):
        """
        Resolve a Si (or SiNo Si) header: its FinSi and the branch keywords at depth 1.
        """
        depth = 1
        else_index = None
        clauses = []
        for i in range(start_index + 1, len(self.lines)):
            text = self._text(i)
            if HEADER_IF.match(text):
                depth += 1
            elif TOKEN_END_IF.match(text):
                depth -= 1
                if depth == 0:
                    return IfBlock(i, else_index, clauses)
            elif depth == 1 and (HEADER_ELSE.match(text) or HEADER_ELSEIF.match(text)):
                kind = 'else' if HEADER_ELSE.match(text) else 'elseif'
                clauses.append((kind, i))
                if else_index is None:
                    else_index = i
        return IfBlock(len(self.lines), else_index, clauses)

    def resolve_switch(self, start_index):
        """
        Resolve a Segun header: its FinSegun and the line range of every case group.
        """
        depth = 1
        markers = []  # (kind, index, values)
        end = len(self.lines)
        for i in range(start_index + 1, len(self.lines)):
            text = self._text(i)
            if HEADER_SWITCH.match(text):
                depth += 1
            elif TOKEN_END_SWITCH.match(text):
                depth -= 1
                if depth == 0:
                    end = i
                    break
            elif depth == 1:
                if HEADER_DEFAULT.match(text):
                    markers.append(('default', i, None))
                else:
                    m = HEADER_CASE.match(text)
                    if m:
                        markers.append(('case', i, parse_case_values(m.group(1).strip())))

        cases = []
        default = None
        for n, (kind, index, values) in enumerate(markers):
            group_end = markers[n + 1][1] if n + 1 < len(markers) else end
            if kind == 'default':
                default = (index + 1, group_end)
            else:
                cases.append((values, index + 1, group_end))
        return SwitchBlock(end, cases, default)
