import re
from .errors import ExpressionError

TRAILING_SEMICOLON = re.compile(r';$')
SEMICOLON_ENTONCES = re.compile(r';\s*(entonces)', re.I)


# Token class represents a single token of an expression with position tracking
class Token:
    def __init__(self, type, value, column=1):
        self.type = type      # Token type (e.g., NUMBER, OPERATOR, IDENTIFIER)
        self.value = value    # Actual value of the token
        self.column = column  # Column number inside the expression

    def __str__(self):
        return f"Token({self.type}, {self.value}, col={self.column})"

    __repr__ = __str__


# One executable line of the program after preprocessing
class SourceLine:
    def __init__(self, text, line_number):
        self.text = text                # Trimmed text without comments or trailing ';'
        self.line_number = line_number  # 1-based line number in the program text

    def __str__(self):
        return f"{self.line_number}: {self.text}"

    __repr__ = __str__


def _strip_inline_comment(line):
    """Cut a '//' comment unless it sits inside a quoted literal."""
    quote = None
    for i, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in '"\'':
            quote = char
        elif line.startswith('//', i):
            return line[:i]
    return line


def preprocess_source(code):
    """Split source text into the list of executable lines.

    Blank lines and comments are dropped, one trailing ';' is removed and
    a ';' right before 'Entonces' becomes a space.

    Args:
        code (str): Program source

    Returns:
        list: SourceLine objects in program order
    """
    lines = []
    for line_number, raw in enumerate(code.splitlines(), start=1):
        line = _strip_inline_comment(raw.strip()).strip()
        line = TRAILING_SEMICOLON.sub('', line).rstrip()
        line = SEMICOLON_ENTONCES.sub(r' \1', line)
        if not line:
            continue
        lines.append(SourceLine(line, line_number))
    return lines


# Lexer class breaks an expression down into tokens
class Lexer:
    OPERATORS = ('**', '<=', '>=', '<>', '!=', '==', '=', '<', '>',
                 '+', '-', '*', '/', '^', '%', '&', '|', '~')

    def __init__(self, text):
        self.text = text.strip()  # Expression to tokenize
        self.pos = 0              # Current position in text
        self.tokens = []          # List of tokens

    # Main tokenization method that processes the entire expression
    def tokenize(self):
        while self.pos < len(self.text):
            char = self.text[self.pos]

            if char.isspace():
                self.pos += 1
                continue
            # Identifiers, keywords and function names (accented letters included)
            elif char.isalpha() or char == '_':
                start = self.pos
                word = self._read_word()
                self.tokens.append(Token('IDENTIFIER', word, start + 1))
            elif char.isdigit() or (char == '.' and self._peek().isdigit()):
                self.tokens.append(self._number())
            elif char in '"\'':
                self.tokens.append(self._string(char))
            elif char in '()':
                self.tokens.append(Token('PAREN', char, self.pos + 1))
                self.pos += 1
            elif char in '[]':
                self.tokens.append(Token('BRACKET', char, self.pos + 1))
                self.pos += 1
            elif char == ',':
                self.tokens.append(Token('COMMA', char, self.pos + 1))
                self.pos += 1
            else:
                for op in self.OPERATORS:
                    if self.text.startswith(op, self.pos):
                        self.tokens.append(Token('OPERATOR', op, self.pos + 1))
                        self.pos += len(op)
                        break
                else:
                    raise ExpressionError(
                        f"Carácter inesperado '{char}' en la columna {self.pos + 1}", self.text)
        self.tokens.append(Token('EOF', None, self.pos + 1))
        return self.tokens

    # Helper methods for tokenization
    def _peek(self):
        if self.pos + 1 < len(self.text):
            return self.text[self.pos + 1]
        return ''

    def _read_word(self):
        start = self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isalnum() or self.text[self.pos] == '_'):
            self.pos += 1
        return self.text[start:self.pos]

    def _number(self):
        start = self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isdigit() or self.text[self.pos] == '.'):
            self.pos += 1
        # Optional exponent (1.2e3)
        m = re.match(r'[eE][+-]?\d+', self.text[self.pos:])
        if m:
            self.pos += m.end()
        result = self.text[start:self.pos]
        try:
            value = float(result) if any(c in result for c in '.eE') else int(result)
        except ValueError:
            raise ExpressionError(f"Número inválido '{result}'", self.text)
        return Token('NUMBER', value, start + 1)

    def _string(self, quote):
        start = self.pos
        end = self.text.find(quote, self.pos + 1)
        if end == -1:
            raise ExpressionError("Cadena sin cerrar", self.text)
        self.pos = end + 1
        return Token('STRING', self.text[start + 1:end], start + 1)
