# Syntax tree node classes
# Expression nodes are built by ExpressionParser; statement nodes by Parser.
# Statements live in one flat list (one per program line), so every block
# refers to its body through indices into that list.
class Node:
    pass


# ---- Expressions ----

# Represents a numeric literal (e.g., 5, 2.5)
class Number(Node):
    def __init__(self, value):
        self.value = value


# Represents a quoted text literal (e.g., "hola")
class String(Node):
    def __init__(self, value):
        self.value = value


# Represents VERDADERO / FALSO
class Boolean(Node):
    def __init__(self, value):
        self.value = value


# Represents a variable reference (e.g., edad)
class Variable(Node):
    def __init__(self, name):
        self.name = name  # Name as written; lookups are case-insensitive


# Represents an array element read (e.g., a[i + 1])
class Index(Node):
    def __init__(self, name, index):
        self.name = name    # Array variable name
        self.index = index  # Expression node for the position


# Represents a prefix operation (e.g., -x, NO listo)
class UnaryOp(Node):
    def __init__(self, op, operand):
        self.op = op            # Normalized operator: '-', '+', 'not'
        self.operand = operand


# Represents a binary operation (e.g., a + b, x <> 3, p Y q)
class BinaryOp(Node):
    def __init__(self, left, op, right):
        self.left = left   # Left operand
        self.op = op       # Normalized operator (+, -, *, /, ^, mod, =, <>, <, <=, >, >=, and, or)
        self.right = right # Right operand


# Represents a built-in function call (e.g., raiz(x))
class Call(Node):
    def __init__(self, name, args):
        self.name = name  # Lower-cased function name
        self.args = args  # List of expression nodes


# ---- Statements ----

class Statement(Node):
    def __init__(self, line):
        self.line = line  # SourceLine the statement was parsed from


# Lines that are recognized but do nothing when reached:
# block terminators, branch keywords, case labels, unknown lines
class Skip(Statement):
    pass


# Algoritmo / Proceso / SubProceso headers and their terminators
class ProgramMarker(Statement):
    pass


# Definir a, b Como Entero
class Declare(Statement):
    def __init__(self, line, names, type_name):
        super().__init__(line)
        self.names = names          # Variable names, as written
        self.type_name = type_name  # Type word as written


# Dimension a[10], b[n]
class Dimension(Statement):
    def __init__(self, line, arrays, text):
        super().__init__(line)
        self.arrays = arrays  # List of (name, size expression text)
        self.text = text      # Raw text after the keyword, for the trace label


# Leer a, b
class Input(Statement):
    def __init__(self, line, names, text):
        super().__init__(line)
        self.names = names
        self.text = text


# Escribir "texto", valor
class Output(Statement):
    def __init__(self, line, text):
        super().__init__(line)
        self.text = text  # Comma-separated concatenation list


# Mientras <condition> Hacer ... FinMientras
class While(Statement):
    def __init__(self, line, condition, start, end, end_index):
        super().__init__(line)
        self.condition = condition
        self.start = start          # First body statement
        self.end = end              # Index of FinMientras (body is start..end-1)
        self.end_index = end_index  # Where execution resumes after the loop


# Para v <- a Hasta b [Con Paso s] Hacer ... FinPara
class For(Statement):
    def __init__(self, line, var_name, start_expr, end_expr, step_expr, start, end, end_index):
        super().__init__(line)
        self.var_name = var_name
        self.start_expr = start_expr
        self.end_expr = end_expr
        self.step_expr = step_expr  # None means a step of 1
        self.start = start
        self.end = end
        self.end_index = end_index


# One "<values>:" group of a Segun block
class Case(Node):
    def __init__(self, values, start, end):
        self.values = values  # Parsed case values (numbers or strings)
        self.start = start
        self.end = end


# Segun <subject> Hacer ... FinSegun
class Switch(Statement):
    def __init__(self, line, subject, cases, default, end_index):
        super().__init__(line)
        self.subject = subject
        self.cases = cases          # List of Case in source order
        self.default = default      # (start, end) of De Otro Modo, or None
        self.end_index = end_index


# Si <condition> Entonces ... [SiNo Si ...] [SiNo ...] FinSi
# The same node type is used for a "SiNo Si" line; it then heads the rest of the chain.
class If(Statement):
    def __init__(self, line, condition, start, end, else_index, terminator, end_index, is_else_if=False):
        super().__init__(line)
        self.condition = condition
        self.start = start              # First statement of the "then" body
        self.end = end                  # One past the last "then" statement
        self.else_index = else_index    # Line of the next SiNo / SiNo Si at this depth, or None
        self.terminator = terminator    # Index of FinSi
        self.end_index = end_index
        self.is_else_if = is_else_if


# x <- expr, a[i] <- expr, x = expr
class Assign(Statement):
    def __init__(self, line, target, name, index, value):
        super().__init__(line)
        self.target = target  # Target as written (e.g., "a[i]")
        self.name = name      # Variable or array name
        self.index = index    # Index expression text, or None for scalars
        self.value = value    # Value expression text
