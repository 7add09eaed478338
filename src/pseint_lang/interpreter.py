import inspect
import math

from .ast import (
    Assign, Declare, Dimension, For, If, Input, Output, ProgramMarker,
    Skip, Switch, While
)
from .errors import ExpressionError, PseudocodeError, UndefinedArrayError
from .expression import ExpressionEvaluator
from .lexer import preprocess_source
from .parser import Parser
from .scope import VariableStore
from .trace import TraceBuilder
from .utils import format_value, is_number, parse_leading_number

MAX_WHILE_ITERATIONS = 100

_DONE = object()


class ExecutionResult:
    def __init__(self, output, errors, trace, variables):
        self.output = output        # Lines written by Escribir, in order
        self.errors = errors        # Error messages, in order
        self.trace = trace          # TraceNode list, start and end included
        self.variables = variables  # Final variable snapshot

    @property
    def ok(self):
        return not self.errors


class Frame:
    """A body being executed: statements start..end-1, run once per pass."""

    def __init__(self, start, end, passes=None, owner=None):
        self.start = start
        self.end = end
        self.ip = end  # Exhausted, so the first pass is requested before any statement runs
        self.passes = passes if passes is not None else iter((None,))
        self.owner = owner  # Statement that opened the frame


class Interpreter:
    def __init__(self, input_provider=None, on_variables=None, max_while_iterations=MAX_WHILE_ITERATIONS):
        """Create an interpreter for one run.

        Args:
            input_provider: Called with a prompt when the program reads input;
                may return a string or an awaitable resolving to one
            on_variables: Called with a variable snapshot after every change
            max_while_iterations (int): Pass limit for Mientras loops
        """
        self.input_provider = input_provider
        self.on_variables = on_variables
        self.max_while_iterations = max_while_iterations
        self._reset_state()

    def _reset_state(self):
        self.store = VariableStore(self.on_variables)
        self.evaluator = ExpressionEvaluator(self.store, on_error=self._report)
        self.trace = TraceBuilder()
        self.output = []
        self.errors = []
        self.statements = []
        self.frames = []
        self.has_error = False
        self.cancelled = False

    @property
    def halted(self):
        return self.has_error or self.cancelled

    def cancel(self):
        """Stop before the next statement. The run still returns its partial results."""
        self.cancelled = True

    async def execute(self, code):
        """Run a whole program.

        Args:
            code (str): Program source

        Returns:
            ExecutionResult: output, errors, trace and final variables
        """
        self._reset_state()
        lines = preprocess_source(code)
        self.statements = Parser(lines).parse()

        self.trace.add_node('start', 'Inicio')
        self.frames = [Frame(0, len(self.statements))]
        while self.frames and not self.halted:
            frame = self.frames[-1]
            statement = frame.owner
            try:
                if frame.ip >= frame.end:
                    if next(frame.passes, _DONE) is _DONE:
                        self.frames.pop()
                    else:
                        frame.ip = frame.start
                    continue
                statement = self.statements[frame.ip]
                frame.ip = await self._execute_statement(statement, frame.ip)
            except PseudocodeError as e:
                self._report(e)
            except Exception as e:
                line_number = statement.line.line_number if statement is not None else 0
                self._report(f"Error en línea {line_number}: {e}")

        self.trace.add_node('end', 'Fin')
        self.trace.stitch()
        return ExecutionResult(self.output, self.errors, self.trace.nodes, self.store.snapshot())

    def _report(self, error):
        self.errors.append(str(error))
        self.has_error = True

    async def _execute_statement(self, stmt, index):
        """Executes one statement and returns the index of the next one in its body."""
        if isinstance(stmt, (ProgramMarker, Skip)):
            return index + 1
        elif isinstance(stmt, Declare):
            self._execute_declare(stmt)
        elif isinstance(stmt, Dimension):
            self._execute_dimension(stmt)
        elif isinstance(stmt, Input):
            await self._execute_input(stmt)
        elif isinstance(stmt, Output):
            self._execute_output(stmt)
        elif isinstance(stmt, While):
            self._execute_while(stmt)
            return stmt.end_index
        elif isinstance(stmt, For):
            self._execute_for(stmt)
            return stmt.end_index
        elif isinstance(stmt, Switch):
            self._execute_switch(stmt)
            return stmt.end_index
        elif isinstance(stmt, If):
            self._execute_if(stmt)
            return stmt.end_index
        elif isinstance(stmt, Assign):
            self._execute_assignment(stmt)
        return index + 1

    def _execute_declare(self, stmt):
        for name in stmt.names:
            self.store.declare(name, stmt.type_name)
        self.trace.add_node('process', f"Definir {', '.join(stmt.names)} como {stmt.type_name}")

    def _execute_dimension(self, stmt):
        for name, size_expr in stmt.arrays:
            size = self._integer(self.evaluator.evaluate(size_expr), size_expr)
            self.store.dimension(name, size)
        self.trace.add_node('process', f"Dimension {stmt.text}")

    async def _execute_input(self, stmt):
        for name in stmt.names:
            variable = self.store.lookup(name, hint=True)
            raw = await self._read_input(f"Ingrese valor para {name}:")
            self.store.set(name, self._coerce_input(variable.type, raw))
        self.trace.add_node('input', f"Leer {stmt.text}")

    async def _read_input(self, prompt):
        # The only place where a run can suspend
        if self.input_provider is None:
            return ''
        value = self.input_provider(prompt)
        if inspect.isawaitable(value):
            value = await value
        return '' if value is None else str(value)

    def _coerce_input(self, type_name, raw):
        if type_name in ('entero', 'real'):
            number = parse_leading_number(raw)
            if number is None or not math.isfinite(number):
                return 0
            return math.trunc(number) if type_name == 'entero' else number
        if type_name == 'logico':
            return raw.strip().lower() == 'verdadero'
        return raw

    def _execute_output(self, stmt):
        self.output.append(self.evaluator.evaluate_concatenation(stmt.text))
        self.trace.add_node('output', f"Escribir {stmt.text}")

    def _execute_while(self, stmt):
        self.trace.add_node('decision', f"Mientras {stmt.condition}")
        self.frames.append(Frame(stmt.start, stmt.end, self._while_passes(stmt), stmt))

    def _while_passes(self, stmt):
        iterations = 0
        while iterations < self.max_while_iterations and self.evaluator.evaluate_condition(stmt.condition):
            yield iterations
            iterations += 1

    def _execute_for(self, stmt):
        start = self._integer(self.evaluator.evaluate(stmt.start_expr), stmt.start_expr)
        end = self._integer(self.evaluator.evaluate(stmt.end_expr), stmt.end_expr)
        step = 1
        if stmt.step_expr is not None:
            step = self._integer(self.evaluator.evaluate(stmt.step_expr), stmt.step_expr)
            if step == 0:
                raise ExpressionError("El paso de Para no puede ser 0", stmt.step_expr)
        self.trace.add_node('decision', f"Para {stmt.var_name} <- {start} Hasta {end}")
        self.frames.append(Frame(stmt.start, stmt.end, self._for_passes(stmt.var_name, start, end, step), stmt))

    def _for_passes(self, name, start, end, step):
        value = start
        while value <= end if step > 0 else value >= end:
            self.store.define(name, 'entero', value)
            yield value
            value += step

    def _execute_switch(self, stmt):
        value = self.evaluator.evaluate(stmt.subject)
        self.trace.add_node('decision', f"Segun {stmt.subject}")
        for case in stmt.cases:
            if any(self._case_matches(case_value, value) for case_value in case.values):
                self.trace.add_node('process', f"Caso {', '.join(format_value(v) for v in case.values)}")
                self.frames.append(Frame(case.start, case.end, owner=stmt))
                return
        if stmt.default is not None:
            self.trace.add_node('process', 'De Otro Modo')
            start, end = stmt.default
            self.frames.append(Frame(start, end, owner=stmt))

    def _case_matches(self, case_value, value):
        if is_number(case_value) and is_number(value):
            return case_value == value
        return format_value(case_value).lower() == format_value(value).lower()

    def _execute_if(self, stmt):
        result = self.evaluator.evaluate_condition(stmt.condition)
        keyword = 'SiNo Si' if stmt.is_else_if else 'Si'
        self.trace.add_node('decision', f"{keyword} {stmt.condition}")
        if result:
            self.frames.append(Frame(stmt.start, stmt.end, owner=stmt))
        elif stmt.else_index is not None:
            branch = self.statements[stmt.else_index]
            if isinstance(branch, If) and branch.is_else_if:
                # Hand control to the SiNo Si line, which applies this same rule
                self.frames.append(Frame(stmt.else_index, stmt.else_index + 1, owner=stmt))
            else:
                self.frames.append(Frame(stmt.else_index + 1, stmt.terminator, owner=stmt))

    def _execute_assignment(self, stmt):
        if stmt.index is not None:
            if stmt.name not in self.store:
                raise UndefinedArrayError(stmt.name)
            index = self.evaluator.evaluate(stmt.index)
            value = self.evaluator.evaluate(stmt.value)
            self.store.set_element(stmt.name, index, value)
        else:
            self.store.lookup(stmt.name, hint=True)
            value = self.evaluator.evaluate(stmt.value)
            self.store.set(stmt.name, value)
        self.trace.add_node('process', f"{stmt.target} <- {stmt.value}")

    def _integer(self, value, expression):
        if isinstance(value, bool) or not is_number(value) or not math.isfinite(value):
            raise ExpressionError(f"Se esperaba un número entero, se obtuvo {format_value(value)!r}", expression)
        return int(value)
