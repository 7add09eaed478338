import math

import pytest

from pseint_lang.errors import ArrayIndexError, ExpressionError, UndefinedVariableError
from pseint_lang.expression import ExpressionEvaluator, split_concatenation
from pseint_lang.scope import VariableStore


def make_evaluator(**values):
    """Evaluator over a store holding the given variables (type picked from the value)."""
    store = VariableStore()
    for name, value in values.items():
        if isinstance(value, bool):
            type_name = 'logico'
        elif isinstance(value, int):
            type_name = 'entero'
        elif isinstance(value, float):
            type_name = 'real'
        else:
            type_name = 'cadena'
        store.declare(name, type_name)
        store.set(name, value)
    return ExpressionEvaluator(store)


@pytest.mark.parametrize('text, expected', [
    ('1 + 2 * 3', 7),
    ('(1 + 2) * 3', 9),
    ('2 ^ 3 ^ 2', 512),
    ('-2 ^ 2', -4),
    ('2 ^ -1', 0.5),
    ('7 mod 3', 1),
    ('-7 MOD 3', -1),
    ('7 % 4', 3),
    ('10 / 4', 2.5),
    ('3 > 2 Y 2 > 1', True),
    ('3 > 2 Y NO 2 > 1', False),
    ('FALSO O VERDADERO', True),
    ('1 = 1.0', True),
    ('2 <> 3', True),
])
def test_arithmetic_and_logic(text, expected):
    assert make_evaluator().evaluate(text) == expected


def test_variables_are_case_insensitive():
    ev = make_evaluator(Total=10)
    assert ev.evaluate('total * 2') == 20
    assert ev.evaluate('TOTAL + 1') == 11


def test_division_by_zero_follows_ieee():
    ev = make_evaluator()
    assert ev.evaluate('1 / 0') == math.inf
    assert ev.evaluate('-1 / 0') == -math.inf
    assert math.isnan(ev.evaluate('0 / 0'))
    assert math.isnan(ev.evaluate('5 mod 0'))


def test_builtin_functions():
    ev = make_evaluator(nombre='Ana')
    assert ev.evaluate('raiz(16)') == 4.0
    assert ev.evaluate('RC(9) + abs(-1)') == 4.0
    assert ev.evaluate('trunc(3.7)') == 3
    assert ev.evaluate('redon(2.5)') == 3
    assert ev.evaluate('redon(-2.5)') == -2
    assert ev.evaluate('longitud(nombre)') == 3
    assert ev.evaluate('mayusculas(nombre)') == 'ANA'
    assert ev.evaluate('subcadena(nombre, 0, 1)') == 'An'
    assert ev.evaluate('convertiranumero("12")') == 12
    assert 0 <= ev.evaluate('azar(10)') < 10


def test_unknown_function_and_wrong_arity():
    ev = make_evaluator()
    with pytest.raises(ExpressionError):
        ev.evaluate('doble(2)')
    with pytest.raises(ExpressionError):
        ev.evaluate('raiz(1, 2)')


def test_malformed_expression_raises():
    ev = make_evaluator(x=1)
    with pytest.raises(ExpressionError):
        ev.evaluate('x +')
    with pytest.raises(ExpressionError):
        ev.evaluate('(x')
    with pytest.raises(ExpressionError):
        ev.evaluate('x x')


def test_undefined_variable_raises():
    with pytest.raises(UndefinedVariableError) as exc:
        make_evaluator().evaluate('y + 1')
    assert str(exc.value) == 'Error: La variable "y" no ha sido definida.'


def test_array_elements():
    store = VariableStore()
    store.dimension('a', 3)
    store.set_element('a', 1, 7)
    store.declare('i', 'entero')
    store.set('i', 1)
    ev = ExpressionEvaluator(store)
    assert ev.evaluate('a[i] * 2') == 14.0
    assert ev.evaluate('a[i - 1]') == 0.0
    with pytest.raises(ArrayIndexError):
        ev.evaluate('a[3]')


def test_split_concatenation_ignores_commas_in_quotes():
    assert split_concatenation('"a, b", x, \'c,d\'') == ['"a, b"', 'x', "'c,d'"]


def test_concatenation_formats_values():
    ev = make_evaluator(x=0, nombre='Ana', listo=True, media=2.5)
    assert ev.evaluate_concatenation('"v=", x') == 'v= 0'
    assert ev.evaluate_concatenation('"Hola", nombre') == 'Hola Ana'
    assert ev.evaluate_concatenation('"listo:", listo') == 'listo: VERDADERO'
    assert ev.evaluate_concatenation('"doble:", media * 2') == 'doble: 5'
    assert ev.evaluate_concatenation('"media:", media') == 'media: 2.5'


def test_concatenation_reports_undefined_and_continues():
    reported = []
    ev = ExpressionEvaluator(VariableStore(), on_error=reported.append)
    assert ev.evaluate_concatenation('"x =", x') == 'x = [x?]'
    assert len(reported) == 1
    assert isinstance(reported[0], UndefinedVariableError)


def test_quoted_text():
    ev = make_evaluator(nombre='Ana')
    assert ev.evaluate('"Hola", nombre') == 'Hola Ana'
    assert ev.evaluate('"Hola"') == 'Hola'
    assert ev.evaluate('"Hola " + nombre') == 'Hola Ana'


def test_conditions():
    ev = make_evaluator(edad=20, nombre='Ana', activo=False)
    assert ev.evaluate_condition('edad > 18') is True
    assert ev.evaluate_condition('edad >= 18 Y edad < 65') is True
    assert ev.evaluate_condition('nombre = "Ana"') is True
    assert ev.evaluate_condition('nombre <> "Luis"') is True
    assert ev.evaluate_condition('NO activo') is True
    assert ev.evaluate_condition('activo = FALSO') is True


def test_condition_failures_are_false():
    ev = make_evaluator(edad=20, nombre='Ana')
    # Malformed or ill-typed conditions do not raise
    assert ev.evaluate_condition('edad >') is False
    assert ev.evaluate_condition('nombre > 3') is False
    assert ev.evaluate_condition('edad $ 3') is False


def test_condition_with_undefined_variable_raises():
    with pytest.raises(UndefinedVariableError):
        make_evaluator().evaluate_condition('z > 1')


def test_y_and_o_can_be_variable_names():
    ev = make_evaluator(y=2, o=3)
    assert ev.evaluate('y + o') == 5
    assert ev.evaluate_condition('y < o Y o > 2') is True


def test_split_concatenation_keeps_function_arguments_and_indices():
    assert split_concatenation('"sub:", subcadena(s, 0, 1), a[i], concatenar("x", y)') == [
        '"sub:"', 'subcadena(s, 0, 1)', 'a[i]', 'concatenar("x", y)']


def test_functions_with_quoted_arguments():
    ev = make_evaluator(s='abcd')
    assert ev.evaluate('concatenar("ab", "cd")') == 'abcd'
    assert ev.evaluate('subcadena("hola mundo", 0, 3)') == 'hola'
    assert ev.evaluate_concatenation('"sub:", subcadena(s, 0, 1), concatenar(s, "!")') == 'sub: ab abcd!'
