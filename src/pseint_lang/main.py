import asyncio

from .interpreter import Interpreter
from .lexer import preprocess_source
from .parser import Parser
from .trace import trace_to_csv

DEFAULT_PROGRAM = """Algoritmo condicionales
    Definir edad Como Entero;
    Escribir "Digite su edad";
    Leer edad;

    Si edad > 18 Entonces
        Escribir "Usted es mayor de edad";
    SiNo
        Escribir "Usted es menor de edad";
    FinSi
FinAlgoritmo"""


class ScriptedInput:
    """Input provider that answers prompts from a list of values ("" once exhausted)."""

    def __init__(self, values=None, fallback=None):
        self.values = list(values or [])
        self.fallback = fallback  # Called with the prompt when the list runs out
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.values:
            return self.values.pop(0)
        if self.fallback is not None:
            return self.fallback(prompt)
        return ''


async def execute(code, input_provider=None, on_variables=None):
    """Run a program with a fresh interpreter.

    Args:
        code (str): Program source
        input_provider: Called with a prompt on every read; may return an awaitable
        on_variables: Called with a variable snapshot after every change

    Returns:
        ExecutionResult: output, errors, trace and final variables
    """
    interpreter = Interpreter(input_provider=input_provider, on_variables=on_variables)
    return await interpreter.execute(code)


def run_pseint(code, inputs=None, on_variables=None, debug=False, input_provider=None):
    """Run the pseudocode interpreter synchronously.

    Args:
        code (str): The source code to execute
        inputs (list): Values answered, in order, to the program's read prompts
        on_variables: Called with a variable snapshot after every change
        debug (bool): If True, prints every stage and the trace in CSV format
        input_provider: Used once the scripted inputs run out

    Returns:
        ExecutionResult: The result of the run
    """
    if debug:
        print("Input code:")
        print(code)
        print("\nPreprocessing...")
        lines = preprocess_source(code)
        for line in lines:
            print(f"  {line.line_number}: {line.text}")
        print("\nParsing...")
        for index, statement in enumerate(Parser(lines).parse()):
            print(f"  [{index}] {type(statement).__name__}")
        print("\nInterpreting...")

    provider = ScriptedInput(inputs, fallback=input_provider)
    result = asyncio.run(execute(code, provider, on_variables))

    if debug:
        print("\nOutput:")
        for line in result.output:
            print(f"  {line}")
        if result.errors:
            print("\nErrors:")
            for error in result.errors:
                print(f"  {error}")
        print("\nTrace (CSV format):")
        print(trace_to_csv(result.trace))

    return result


if __name__ == "__main__":
    run_pseint(DEFAULT_PROGRAM, inputs=["20"], debug=True)
