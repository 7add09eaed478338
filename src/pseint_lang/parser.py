import re

from .ast import (
    Assign, Case, Declare, Dimension, For, If, Input, Output, ProgramMarker,
    Skip, Switch, While
)
from .control_flow import BlockResolver

# Statement patterns, tried in this order (first match wins)
PROGRAM_MARKER = re.compile(
    r'^(?:fin\s*)?(?:algoritmo|proceso|subproceso|funcion)\b', re.I)
DECLARE = re.compile(r'^definir\s+(.+?)\s+como\s+(\w+)', re.I)
DIMENSION = re.compile(r'^dimension\s+(.+)$', re.I)
DIMENSION_ITEM = re.compile(r'(\w+)\s*\[([^\]]+)\]')
INPUT = re.compile(r'^leer\s+(.+)$', re.I)
OUTPUT = re.compile(r'^(?:escribir|imprimir|mostrar)\s+(.+)$', re.I)
WHILE = re.compile(r'^mientras\s+(.+?)(?:\s+hacer)?$', re.I)
FOR = re.compile(
    r'^para\s+(\w+)\s*(?:<-|=)\s*(.+?)\s+hasta\s+(.+?)(?:\s+con\s+paso\s+(.+?))?(?:\s+hacer)?$', re.I)
SWITCH = re.compile(r'^segun\s+(.+?)(?:\s+hacer)?$', re.I)
IF = re.compile(r'^si\s+(.+?)\s+entonces\b', re.I)
ELSE_IF = re.compile(r'^sino\s+si\s+(.+?)\s+entonces\b', re.I)
ASSIGN = re.compile(r'^(\w+)\s*(?:\[([^\]]+)\])?\s*(?:<-|=)\s*(.+)$')
NAME = re.compile(r'^[^\W\d]\w*$')


# Parser converts the preprocessed program lines into a flat statement list
class Parser:
    def __init__(self, lines):
        self.lines = lines
        self.resolver = BlockResolver(lines)

    # Main parsing method: exactly one statement per line, so statement index == line index
    def parse(self):
        return [self._statement(i) for i in range(len(self.lines))]

    # Recognizes a single line
    def _statement(self, index):
        line = self.lines[index]
        text = line.text

        if PROGRAM_MARKER.match(text):
            return ProgramMarker(line)

        m = DECLARE.match(text)
        if m:
            names = [name.strip() for name in m.group(1).split(',')]
            if all(NAME.match(name) for name in names):
                return Declare(line, names, m.group(2))
            return Skip(line)

        m = DIMENSION.match(text)
        if m:
            arrays = DIMENSION_ITEM.findall(m.group(1))
            if arrays:
                return Dimension(line, [(name, size.strip()) for name, size in arrays], m.group(1))
            return Skip(line)

        m = INPUT.match(text)
        if m:
            names = [name.strip() for name in m.group(1).split(',') if name.strip()]
            return Input(line, names, m.group(1))

        m = OUTPUT.match(text)
        if m:
            return Output(line, m.group(1))

        m = WHILE.match(text)
        if m:
            end = self.resolver.find_block_end('mientras', index)
            return While(line, m.group(1).strip(), index + 1, end, end + 1)

        m = FOR.match(text)
        if m:
            var_name, start_expr, end_expr, step_expr = m.groups()
            end = self.resolver.find_block_end('para', index)
            return For(line, var_name, start_expr.strip(), end_expr.strip(),
                       step_expr.strip() if step_expr else None, index + 1, end, end + 1)

        m = SWITCH.match(text)
        if m:
            block = self.resolver.resolve_switch(index)
            cases = [Case(values, start, end) for values, start, end in block.cases]
            return Switch(line, m.group(1).strip(), cases, block.default, block.terminator + 1)

        m = IF.match(text)
        if m:
            return self._if(line, index, m.group(1).strip(), False)

        # Only reached directly when an enclosing Si hands control to this line
        m = ELSE_IF.match(text)
        if m:
            return self._if(line, index, m.group(1).strip(), True)

        if '<-' in text or '=' in text:
            m = ASSIGN.match(text)
            if m:
                name, index_expr, value = m.groups()
                target = f"{name}[{index_expr.strip()}]" if index_expr else name
                return Assign(line, target, name,
                              index_expr.strip() if index_expr else None, value.strip())

        return Skip(line)

    def _if(self, line, index, condition, is_else_if):
        block = self.resolver.resolve_if(index)
        then_end = block.else_index if block.else_index is not None else block.terminator
        return If(line, condition, index + 1, then_end, block.else_index,
                  block.terminator, block.terminator + 1, is_else_if)
