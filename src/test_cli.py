import csv

import pytest

from pseint_lang import DEFAULT_PROGRAM
from pseint_lang.cli import main


def write_program(tmp_path, code, name='programa.psc'):
    path = tmp_path / name
    path.write_text(code, encoding='utf-8')
    return path


def test_runs_program_with_inputs(tmp_path, capsys):
    path = write_program(tmp_path, DEFAULT_PROGRAM)
    main([str(path), '--input', '20'])
    out = capsys.readouterr().out
    assert out.splitlines() == ['Digite su edad', 'Usted es mayor de edad']


def test_prompts_on_stdin_when_inputs_run_out(tmp_path, capsys, monkeypatch):
    path = write_program(tmp_path, DEFAULT_PROGRAM)
    answers = iter(['10'])
    monkeypatch.setattr('builtins.input', lambda prompt='': next(answers))
    main([str(path)])
    out = capsys.readouterr().out
    assert 'Usted es menor de edad' in out


def test_vars_flag(tmp_path, capsys):
    path = write_program(tmp_path, 'Definir nombre Como Cadena\nnombre <- "Ana"\nDimension a[2]')
    main([str(path), '--vars'])
    out = capsys.readouterr().out
    assert 'nombre (cadena) = "Ana"' in out
    assert 'a (arreglo) = [0, 0]' in out


def test_debug_writes_trace_csv(tmp_path, capsys):
    path = write_program(tmp_path, DEFAULT_PROGRAM)
    main([str(path), '--input', '20', '--debug'])
    out = capsys.readouterr().out
    assert 'Trace (CSV format):' in out
    csv_path = tmp_path / 'programa.csv'
    with open(csv_path, newline='') as f:
        rows = list(csv.reader(f))
    assert rows[0] == ['id', 'kind', 'label', 'children']
    assert [row[1] for row in rows[1:]] == [
        'start', 'process', 'output', 'input', 'decision', 'output', 'end']


def test_program_errors_exit_with_status_1(tmp_path, capsys):
    path = write_program(tmp_path, 'Escribir x')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert 'Error: La variable "x" no ha sido definida.' in out


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'no_existe.psc')])
    assert exc.value.code == 1
    assert 'not found' in capsys.readouterr().out
