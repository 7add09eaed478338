"""
Variable storage for the pseudocode interpreter.
Handles case-insensitive lookup, type defaults, fixed-size arrays and
change notifications.
"""

import math

import pyarrow as pa

from .errors import ArrayIndexError, ExpressionError, UndefinedArrayError, UndefinedVariableError
from .utils import is_number, normalize_keyword

DEFAULT_VALUES = {
    'entero': 0,
    'real': 0,
    'caracter': '',
    'cadena': '',
    'logico': False,
}

TYPE_ALIASES = {
    'numero': 'real',
    'numerico': 'real',
    'texto': 'cadena',
}

ARRAY_TYPE = 'arreglo'


def normalize_type(type_name):
    key = normalize_keyword(type_name)
    return TYPE_ALIASES.get(key, key)


class Variable:
    def __init__(self, name, type, value):
        self.name = name    # Name as first written, for display
        self.type = type    # Normalized type name (entero, real, cadena, ..., arreglo)
        self.value = value

    def copy(self):
        # Arrays are immutable pyarrow arrays, so a shallow copy is a stable snapshot
        return Variable(self.name, self.type, self.value)

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return (self.name, self.type) == (other.name, other.type) and _same_value(self.value, other.value)

    def __repr__(self):
        return f"Variable({self.name!r}, {self.type!r}, {self.value!r})"


def _same_value(a, b):
    if isinstance(a, pa.Array) or isinstance(b, pa.Array):
        return isinstance(a, pa.Array) and isinstance(b, pa.Array) and a.equals(b)
    return a == b


class VariableStore:
    def __init__(self, on_change=None):
        self.variables = {}  # lower-cased name -> Variable, in declaration order
        self.on_change = on_change

    def __contains__(self, name):
        return name.lower() in self.variables

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.snapshot())

    def snapshot(self):
        return [var.copy() for var in self.variables.values()]

    def define(self, name, type_name, value):
        # Redefinition replaces the binding but keeps its position
        self.variables[name.lower()] = Variable(name, type_name, value)
        self._notify()

    def declare(self, name, type_name):
        type_name = normalize_type(type_name)
        self.define(name, type_name, DEFAULT_VALUES.get(type_name))

    def dimension(self, name, size):
        if size < 0:
            raise ExpressionError(f'Tamaño inválido {size} para el arreglo "{name}"')
        self.define(name, ARRAY_TYPE, pa.array([0.0] * size, type=pa.float64()))

    def get(self, name):
        return self.variables.get(name.lower())

    def lookup(self, name, hint=False):
        variable = self.get(name)
        if variable is None:
            raise UndefinedVariableError(name, hint)
        return variable

    def set(self, name, value, hint=True):
        variable = self.lookup(name, hint)
        variable.value = value
        self._notify()

    def _array(self, name):
        variable = self.get(name)
        if variable is None or not isinstance(variable.value, pa.Array):
            raise UndefinedArrayError(name)
        return variable

    def _position(self, variable, index):
        if not is_number(index) or not math.isfinite(index) or index != int(index):
            raise ExpressionError(f'Índice inválido {index!r} para el arreglo "{variable.name}"')
        position = int(index)
        if not 0 <= position < len(variable.value):
            raise ArrayIndexError(variable.name, position, len(variable.value))
        return position

    def get_element(self, name, index):
        variable = self._array(name)
        return variable.value[self._position(variable, index)].as_py()

    def set_element(self, name, index, value):
        variable = self._array(name)
        position = self._position(variable, index)
        if not (is_number(value) or isinstance(value, bool)):
            raise ExpressionError(
                f'El arreglo "{variable.name}" solo admite valores numéricos, no {value!r}')
        values = variable.value.to_pylist()
        values[position] = float(value)
        variable.value = pa.array(values, type=pa.float64())
        self._notify()
