import pytest

from pseint_lang.errors import ExpressionError
from pseint_lang.lexer import Lexer, preprocess_source


def tokens(text):
    return [(t.type, t.value) for t in Lexer(text).tokenize()]


def test_preprocess_drops_blank_lines_and_comments():
    code = """
    // Programa de prueba
    Algoritmo demo

        Definir x Como Entero;   // contador
    FinAlgoritmo
    """
    lines = preprocess_source(code)
    print([str(line) for line in lines])
    assert [line.text for line in lines] == ['Algoritmo demo', 'Definir x Como Entero', 'FinAlgoritmo']
    # Line numbers refer to the program text
    assert [line.line_number for line in lines] == [3, 5, 6]


def test_preprocess_keeps_comment_markers_inside_quotes():
    lines = preprocess_source('Escribir "http://ejemplo.com" // enlace')
    assert lines[0].text == 'Escribir "http://ejemplo.com"'


def test_preprocess_semicolon_before_entonces():
    lines = preprocess_source('Si x > 3; Entonces')
    assert lines[0].text == 'Si x > 3 Entonces'


def test_preprocess_removes_only_one_trailing_semicolon():
    lines = preprocess_source('Escribir "a";;')
    assert lines[0].text == 'Escribir "a";'


def test_tokenize_arithmetic():
    assert tokens('a + 2.5 * (b - 1)') == [
        ('IDENTIFIER', 'a'), ('OPERATOR', '+'), ('NUMBER', 2.5), ('OPERATOR', '*'),
        ('PAREN', '('), ('IDENTIFIER', 'b'), ('OPERATOR', '-'), ('NUMBER', 1),
        ('PAREN', ')'), ('EOF', None),
    ]


def test_tokenize_longest_operator_first():
    assert tokens('x <= 3 <> y') == [
        ('IDENTIFIER', 'x'), ('OPERATOR', '<='), ('NUMBER', 3),
        ('OPERATOR', '<>'), ('IDENTIFIER', 'y'), ('EOF', None),
    ]


def test_tokenize_strings_arrays_and_accents():
    assert tokens('año[i], "hola mundo"') == [
        ('IDENTIFIER', 'año'), ('BRACKET', '['), ('IDENTIFIER', 'i'), ('BRACKET', ']'),
        ('COMMA', ','), ('STRING', 'hola mundo'), ('EOF', None),
    ]


def test_token_columns():
    toks = Lexer('ab + 12').tokenize()
    assert [t.column for t in toks] == [1, 4, 6, 8]


def test_numbers_with_exponent():
    assert tokens('1e3') == [('NUMBER', 1000.0), ('EOF', None)]


def test_unknown_character_is_an_expression_error():
    with pytest.raises(ExpressionError):
        Lexer('a $ b').tokenize()


def test_unterminated_string_is_an_expression_error():
    with pytest.raises(ExpressionError):
        Lexer('"abc').tokenize()
