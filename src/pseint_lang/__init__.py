"""
PSeInt Pseudocode Interpreter

Runs line-oriented, Spanish-keyword pseudocode programs and records an
execution trace that can be drawn as a flowchart.
"""

from .interpreter import ExecutionResult, Interpreter
from .main import DEFAULT_PROGRAM, execute, run_pseint

__version__ = "0.1.0"
__all__ = ["run_pseint", "execute", "Interpreter", "ExecutionResult", "DEFAULT_PROGRAM"]
