from pseint_lang.control_flow import BlockResolver, parse_case_values
from pseint_lang.lexer import preprocess_source


def resolver(code):
    return BlockResolver(preprocess_source(code))


def test_nested_while_blocks():
    r = resolver("""
    Mientras a < 3 Hacer
        Mientras b < 3 Hacer
            b <- b + 1
        FinMientras
        a <- a + 1
    FinMientras
    """)
    assert r.find_block_end('mientras', 0) == 5
    assert r.find_block_end('mientras', 1) == 3


def test_terminator_with_space():
    r = resolver("""
    Para i <- 1 Hasta 3 Hacer
        Escribir i
    Fin Para
    """)
    assert r.find_block_end('para', 0) == 2


def test_unterminated_block_runs_to_the_end():
    r = resolver("""
    Mientras VERDADERO Hacer
        Escribir 1
    """)
    assert r.find_block_end('mientras', 0) == 2


def test_if_with_else():
    r = resolver("""
    Si x > 1 Entonces
        Escribir "a"
    SiNo
        Escribir "b"
    FinSi
    """)
    block = r.resolve_if(0)
    assert block.terminator == 4
    assert block.else_index == 2
    assert block.clauses == [('else', 2)]


def test_if_chain_and_nested_if():
    r = resolver("""
    Si x > 1 Entonces
        Si y > 1 Entonces
            Escribir "a"
        SiNo
            Escribir "b"
        FinSi
    SiNo Si x > 0 Entonces
        Escribir "c"
    SiNo
        Escribir "d"
    FinSi
    """)
    block = r.resolve_if(0)
    assert block.terminator == 10
    assert block.else_index == 6
    assert block.clauses == [('elseif', 6), ('else', 8)]
    inner = r.resolve_if(1)
    assert (inner.terminator, inner.else_index) == (5, 3)


def test_switch_groups():
    r = resolver("""
    Segun opcion Hacer
        1, 2:
            Escribir "uno o dos"
        "a":
            Escribir "letra"
        De Otro Modo:
            Escribir "otro"
    FinSegun
    """)
    block = r.resolve_switch(0)
    assert block.terminator == 7
    assert block.cases == [([1, 2], 2, 3), (['a'], 4, 5)]
    assert block.default == (6, 7)


def test_nested_switch_is_skipped():
    r = resolver("""
    Segun a Hacer
        1:
            Segun b Hacer
                2:
                    Escribir "x"
            FinSegun
        3:
            Escribir "y"
    FinSegun
    """)
    block = r.resolve_switch(0)
    assert block.terminator == 8
    assert [case[0] for case in block.cases] == [[1], [3]]
    assert block.default is None


def test_parse_case_values():
    assert parse_case_values('1, 2.5, "Hola", x') == [1, 2.5, 'Hola', 'x']
