# expression.py
# This module defines the ExpressionParser and ExpressionEvaluator classes, responsible
# for evaluating arithmetic, relational, logical and text expressions of the pseudocode
# language. Expressions are tokenized by the Lexer, parsed by recursive descent into
# expression nodes and evaluated directly over Python values (int, float, bool, str).

import math
import random
import re

from .ast import Boolean, Call, BinaryOp, Index, Number, String, UnaryOp, Variable
from .errors import ExpressionError, UndefinedVariableError
from .lexer import Lexer
from .utils import format_value, is_identifier, is_number, parse_leading_number

QUOTED_LITERAL = re.compile(r'^(?:"[^"]*"|\'[^\']*\')$')

COMPARISON_OPERATORS = {
    '=': '=', '==': '=', '<>': '<>', '!=': '<>',
    '<': '<', '<=': '<=', '>': '>', '>=': '>=',
}
OR_WORDS = {'o', 'or'}
AND_WORDS = {'y', 'and'}
NOT_WORDS = {'no', 'not'}
BOOLEAN_WORDS = {'verdadero': True, 'falso': False}


def split_concatenation(text):
    """Split a comma list into parts, ignoring commas inside quoted literals,
    function arguments and array indices."""
    parts = []
    current = ''
    quote = None
    depth = 0
    for i, char in enumerate(text):
        if char in '"\'' and (i == 0 or text[i - 1] != '\\'):
            if quote is None:
                quote = char
            elif char == quote:
                quote = None
            current += char
        elif char in '([' and quote is None:
            depth += 1
            current += char
        elif char in ')]' and quote is None:
            depth = max(depth - 1, 0)
            current += char
        elif char == ',' and quote is None and depth == 0:
            if current.strip():
                parts.append(current.strip())
            current = ''
        else:
            current += char
    if current.strip():
        parts.append(current.strip())
    return parts


class ExpressionParser:
    """
    Recursive-descent parser over Lexer tokens.
    Precedence, lowest first: O, Y, NO, comparisons, + -, * / mod, unary - +, ^.
    """

    def __init__(self, text):
        self.text = text
        self.tokens = Lexer(text).tokenize()
        self.pos = 0

    def parse(self):
        if self._match('EOF'):
            raise ExpressionError("Expresión vacía", self.text)
        node = self._or()
        if not self._match('EOF'):
            raise ExpressionError(
                f"Símbolo inesperado '{self._current().value}' en la columna {self._current().column}", self.text)
        return node

    def _or(self):
        left = self._and()
        while self._match_word(OR_WORDS) or self._match('OPERATOR', '|'):
            self.pos += 1
            left = BinaryOp(left, 'or', self._and())
        return left

    def _and(self):
        left = self._not()
        while self._match_word(AND_WORDS) or self._match('OPERATOR', '&'):
            self.pos += 1
            left = BinaryOp(left, 'and', self._not())
        return left

    def _not(self):
        if self._match('OPERATOR', '~') or (self._match_word(NOT_WORDS) and self._starts_operand(self.pos + 1)):
            self.pos += 1
            return UnaryOp('not', self._not())
        return self._comparison()

    def _comparison(self):
        left = self._add_sub()
        while self._match('OPERATOR') and self._current().value in COMPARISON_OPERATORS:
            op = COMPARISON_OPERATORS[self._current().value]
            self.pos += 1
            left = BinaryOp(left, op, self._add_sub())
        return left

    def _add_sub(self):
        left = self._mul_div()
        while self._match('OPERATOR', '+') or self._match('OPERATOR', '-'):
            op = self._current().value
            self.pos += 1
            left = BinaryOp(left, op, self._mul_div())
        return left

    def _mul_div(self):
        left = self._unary()
        while True:
            if self._match('OPERATOR') and self._current().value in ('*', '/', '%'):
                op = 'mod' if self._current().value == '%' else self._current().value
            elif self._match_word({'mod'}):
                op = 'mod'
            else:
                return left
            self.pos += 1
            left = BinaryOp(left, op, self._unary())

    def _unary(self):
        if self._match('OPERATOR', '-') or self._match('OPERATOR', '+'):
            op = self._current().value
            self.pos += 1
            return UnaryOp(op, self._unary())
        return self._power()

    def _power(self):
        left = self._term()
        if self._match('OPERATOR', '^') or self._match('OPERATOR', '**'):
            self.pos += 1
            right = self._unary()  # Right-associative, allows 2^-1
            return BinaryOp(left, '^', right)
        return left

    # Parses terms (numbers, strings, variables, array elements, function calls)
    def _term(self):
        token = self._current()
        if token.type == 'NUMBER':
            self.pos += 1
            return Number(token.value)
        elif token.type == 'STRING':
            self.pos += 1
            return String(token.value)
        elif token.type == 'IDENTIFIER':
            self.pos += 1
            word = token.value.lower()
            if word in BOOLEAN_WORDS:
                return Boolean(BOOLEAN_WORDS[word])
            if self._match('PAREN', '('):
                return Call(word, self._arguments())
            if self._match('BRACKET', '['):
                self.pos += 1
                index = self._or()
                self._expect('BRACKET', ']')
                return Index(token.value, index)
            return Variable(token.value)
        elif token.type == 'PAREN' and token.value == '(':
            self.pos += 1
            expr = self._or()
            self._expect('PAREN', ')')
            return expr
        if token.type == 'EOF':
            raise ExpressionError("Expresión incompleta", self.text)
        raise ExpressionError(
            f"Símbolo inesperado '{token.value}' en la columna {token.column}", self.text)

    def _arguments(self):
        self.pos += 1  # Skip '('
        args = []
        if self._match('PAREN', ')'):
            self.pos += 1
            return args
        while True:
            args.append(self._or())
            if self._match('COMMA'):
                self.pos += 1
                continue
            self._expect('PAREN', ')')
            return args

    # Helper methods for parsing
    def _current(self):
        return self.tokens[self.pos]

    def _match(self, type, value=None):
        token = self.tokens[self.pos]
        if token.type == type:
            if value is None or token.value == value:
                return True
        return False

    def _match_word(self, words):
        token = self.tokens[self.pos]
        return token.type == 'IDENTIFIER' and token.value.lower() in words

    def _starts_operand(self, pos):
        token = self.tokens[pos]
        if token.type in ('NUMBER', 'STRING', 'IDENTIFIER'):
            return True
        if token.type == 'PAREN' and token.value == '(':
            return True
        return token.type == 'OPERATOR' and token.value in ('-', '+', '~')

    def _expect(self, type, value):
        if not self._match(type, value):
            raise ExpressionError(f"Se esperaba '{value}'", self.text)
        self.pos += 1


def _divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1, b)
    return a / b


def _modulo(a, b):
    if b == 0:
        return math.nan
    result = math.fmod(a, b)
    if isinstance(a, int) and isinstance(b, int):
        return int(result)
    return result


def _power(a, b):
    if isinstance(a, int) and isinstance(b, int) and b >= 0:
        return a ** b
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.inf
    except (ValueError, ZeroDivisionError):
        if a == 0 and b < 0:
            return math.inf
        return math.nan


def _sqrt(x):
    return math.sqrt(x) if x >= 0 else math.nan


def _ln(x):
    if x == 0:
        return -math.inf
    return math.log(x) if x > 0 else math.nan


def _exp(x):
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _trunc(x):
    return math.trunc(x) if math.isfinite(x) else x


def _round(x):
    # Halves round up, as in most pseudocode tools (redon(-2.5) == -2)
    return math.floor(x + 0.5) if math.isfinite(x) else x


def _random(n):
    return random.randrange(int(n)) if n >= 1 else 0


def _to_number(text):
    number = parse_leading_number(str(text))
    if number is None:
        return math.nan
    return int(number) if number.is_integer() else number


def _substring(text, start, end):
    return str(text)[int(start):int(end) + 1]


# name -> (function, number of arguments, argument kind)
BUILTINS = {
    'raiz': (_sqrt, 1, 'number'),
    'rc': (_sqrt, 1, 'number'),
    'abs': (abs, 1, 'number'),
    'sen': (math.sin, 1, 'number'),
    'cos': (math.cos, 1, 'number'),
    'tan': (math.tan, 1, 'number'),
    'ln': (_ln, 1, 'number'),
    'exp': (_exp, 1, 'number'),
    'trunc': (_trunc, 1, 'number'),
    'redon': (_round, 1, 'number'),
    'azar': (_random, 1, 'number'),
    'longitud': (lambda s: len(str(s)), 1, 'text'),
    'mayusculas': (lambda s: str(s).upper(), 1, 'text'),
    'minusculas': (lambda s: str(s).lower(), 1, 'text'),
    'subcadena': (_substring, 3, 'any'),
    'concatenar': (lambda a, b: format_value(a) + format_value(b), 2, 'any'),
    'convertiranumero': (_to_number, 1, 'text'),
    'convertiratexto': (format_value, 1, 'any'),
}


class ExpressionEvaluator:
    """
    Evaluator for expressions and conditions against a VariableStore.
    Handles comma concatenation lists, arithmetic, comparisons, logic,
    array element reads and built-in functions.
    """

    def __init__(self, store, on_error=None):
        """
        Initialize the evaluator.
        :param store: The VariableStore holding the program's variables.
        :param on_error: Callback receiving PseudocodeErrors that do not stop evaluation
                         (undefined names inside a concatenation list).
        """
        self.store = store
        self.on_error = on_error
        self._cache = {}  # expression text -> parsed tree

    def parse(self, text):
        tree = self._cache.get(text)
        if tree is None:
            tree = ExpressionParser(text).parse()
            self._cache[text] = tree
        return tree

    def evaluate(self, text):
        """
        Evaluate the right-hand side of an assignment or a sub-expression.
        Text containing a quote and a comma list is treated as a concatenation list.
        :param text: Expression text.
        :return: int, float, bool or str.
        """
        if ('"' in text or "'" in text) and len(split_concatenation(text)) > 1:
            return self.evaluate_concatenation(text)
        return self._eval(self.parse(text))

    def evaluate_concatenation(self, text):
        """
        Evaluate a comma-separated list and join the parts with single spaces.
        Quoted literals are copied, variables are formatted, undefined names are
        reported through on_error and shown as [name?], anything else is evaluated.
        """
        results = []
        for part in split_concatenation(text):
            if QUOTED_LITERAL.match(part):
                results.append(part[1:-1])
                continue
            variable = self.store.get(part)
            if variable is not None:
                results.append(format_value(variable.value))
            elif is_identifier(part) and part.lower() not in BOOLEAN_WORDS:
                self._report(UndefinedVariableError(part))
                results.append(f"[{part}?]")
            else:
                results.append(format_value(self._eval(self.parse(part))))
        return ' '.join(results)

    def evaluate_condition(self, text):
        """
        Evaluate a condition to a bool. Malformed or ill-typed conditions are false;
        undefined variables still propagate as errors.
        """
        try:
            return bool(self._eval(self.parse(text)))
        except UndefinedVariableError:
            raise
        except ExpressionError:
            return False

    def _report(self, error):
        if self.on_error is None:
            raise error
        self.on_error(error)

    def _eval(self, node):
        if isinstance(node, (Number, String, Boolean)):
            return node.value
        elif isinstance(node, Variable):
            return self.store.lookup(node.name).value
        elif isinstance(node, Index):
            index = self._eval(node.index)
            return self.store.get_element(node.name, index)
        elif isinstance(node, UnaryOp):
            value = self._eval(node.operand)
            if node.op == 'not':
                return not value
            self._require_number(value, node.op)
            return -value if node.op == '-' else +value
        elif isinstance(node, BinaryOp):
            # Short-circuit logic
            if node.op == 'and':
                return bool(self._eval(node.left)) and bool(self._eval(node.right))
            if node.op == 'or':
                return bool(self._eval(node.left)) or bool(self._eval(node.right))
            return self._binary(node.op, self._eval(node.left), self._eval(node.right))
        elif isinstance(node, Call):
            return self._call(node)
        raise ExpressionError(f"Nodo desconocido {type(node).__name__}")

    def _binary(self, op, left, right):
        if op == '+' and (isinstance(left, str) or isinstance(right, str)):
            return format_value(left) + format_value(right)
        if op in ('=', '<>'):
            equal = self._equals(left, right)
            return equal if op == '=' else not equal
        if op in ('<', '<=', '>', '>='):
            return self._compare(op, left, right)
        self._require_number(left, op)
        self._require_number(right, op)
        if op == '+':
            return left + right
        elif op == '-':
            return left - right
        elif op == '*':
            return left * right
        elif op == '/':
            return _divide(left, right)
        elif op == 'mod':
            return _modulo(left, right)
        elif op == '^':
            return _power(left, right)
        raise ExpressionError(f"Operador desconocido '{op}'")

    def _equals(self, left, right):
        if isinstance(left, str) != isinstance(right, str):
            return False
        return left == right

    def _compare(self, op, left, right):
        if isinstance(left, str) != isinstance(right, str):
            raise ExpressionError(
                f"No se puede comparar {format_value(left)!r} con {format_value(right)!r}")
        try:
            if op == '<':
                return left < right
            elif op == '<=':
                return left <= right
            elif op == '>':
                return left > right
            return left >= right
        except TypeError:
            raise ExpressionError(
                f"No se puede comparar {format_value(left)!r} con {format_value(right)!r}")

    def _call(self, node):
        if node.name not in BUILTINS:
            raise ExpressionError(f"Función desconocida '{node.name}'")
        func, arity, kind = BUILTINS[node.name]
        if len(node.args) != arity:
            raise ExpressionError(
                f"La función '{node.name}' espera {arity} argumento(s), recibió {len(node.args)}")
        args = [self._eval(arg) for arg in node.args]
        if kind == 'number':
            for arg in args:
                self._require_number(arg, node.name)
        return func(*args)

    def _require_number(self, value, op):
        if not (is_number(value) or isinstance(value, bool)):
            raise ExpressionError(f"Operación '{op}' requiere números, recibió {format_value(value)!r}")


