import math
import re
import unicodedata

import pyarrow as pa

NUMBER_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
IDENTIFIER = re.compile(r'^[^\W\d]\w*$')


def strip_accents(text):
    return ''.join(c for c in unicodedata.normalize('NFD', text)
                   if unicodedata.category(c) != 'Mn')


def normalize_keyword(word):
    """Lower-cases a keyword and drops accents, so 'Lógico' == 'logico'."""
    return strip_accents(word).lower()


def is_identifier(text):
    return bool(IDENTIFIER.match(text))


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_leading_number(text):
    """Parse the numeric prefix of text ('20 años' -> 20.0).

    Returns None when text does not start with a number.
    """
    m = NUMBER_PREFIX.match(text)
    if not m:
        return None
    return float(m.group(0))


def format_number(value):
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def format_value(value):
    """Render a runtime value the way the program's output shows it."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'VERDADERO' if value else 'FALSO'
    if is_number(value):
        return format_number(value)
    if isinstance(value, pa.Array):
        return ','.join(format_value(v) for v in value.to_pylist())
    return str(value)


def format_variable(variable):
    """Render a variable's value the way the variables panel shows it."""
    value = variable.value
    if value is None:
        return 'null'
    if isinstance(value, pa.Array):
        return '[' + ', '.join(format_value(v) for v in value.to_pylist()) + ']'
    if variable.type in ('cadena', 'caracter'):
        return f'"{value}"'
    return format_value(value)
