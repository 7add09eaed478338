import sys
import argparse
import os
from .main import run_pseint
from .trace import trace_to_csv
from .utils import format_variable


def _prompt_stdin(prompt):
    try:
        return input(prompt + ' ')
    except EOFError:
        return ''


def main(argv=None):
    parser = argparse.ArgumentParser(description='PSeInt Pseudocode Interpreter')
    parser.add_argument('filename', help='Path to the pseudocode file to execute')
    parser.add_argument('--input', action='append', default=[], metavar='VALUE',
                        help='Value answered to a read prompt (repeatable, used in order)')
    parser.add_argument('--debug', action='store_true', help='Print every stage and save the trace in CSV format')
    parser.add_argument('--vars', action='store_true', help='Print the final variables')

    args = parser.parse_args(argv)

    try:
        with open(args.filename, 'r', encoding='utf-8') as file:
            code = file.read()
    except FileNotFoundError:
        print(f"Error: File '{args.filename}' not found")
        sys.exit(1)

    result = run_pseint(code, inputs=args.input, debug=args.debug, input_provider=_prompt_stdin)

    if not args.debug:
        for line in result.output:
            print(line)
        for error in result.errors:
            print(error)

    if args.vars:
        print("\nVariables:")
        for variable in result.variables:
            print(f"  {variable.name} ({variable.type}) = {format_variable(variable)}")

    if args.debug:
        # Generate CSV filename by replacing the source extension with .csv
        csv_filename = os.path.splitext(args.filename)[0] + '.csv'
        with open(csv_filename, 'w', newline='') as csvfile:
            csvfile.write(trace_to_csv(result.trace))
        print(f"\nTrace saved to: {csv_filename}")

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
