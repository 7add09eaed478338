"""
Error types raised while running a pseudocode program.
Every PseudocodeError is caught by the interpreter, appended to the run's
error list and halts the rest of the run.
"""


class PseudocodeError(Exception):
    """Base class for errors reported back to the program author."""


class UndefinedVariableError(PseudocodeError):
    def __init__(self, name, hint=False):
        self.name = name
        message = f'Error: La variable "{name}" no ha sido definida.'
        if hint:
            message += f' Use "Definir {name} Como Tipo" primero.'
        super().__init__(message)


class UndefinedArrayError(PseudocodeError):
    def __init__(self, name):
        self.name = name
        super().__init__(
            f'Error: El arreglo "{name}" no ha sido definido. Use "Dimension {name}[tamaño]" primero.')


class ArrayIndexError(PseudocodeError):
    def __init__(self, name, index, size):
        self.name = name
        self.index = index
        self.size = size
        super().__init__(
            f'Error: Índice {index} fuera de rango para el arreglo "{name}" (tamaño {size}).')


class ExpressionError(PseudocodeError):
    """Raised when an expression cannot be tokenized, parsed or evaluated."""

    def __init__(self, message, expression=None):
        self.expression = expression
        if expression is not None:
            message = f"{message} en la expresión '{expression}'"
        super().__init__(f"Error: {message}")
