"""Symbolic Energy Package

Expression trees for user-supplied energy formulas: numeric evaluation under
variable bindings and exact symbolic differentiation (force = -grad energy).
"""

from .expression_tree import (
  Expression, evaluate, differentiate, clone,
  ExpressionTreeNode, CustomFunction, OpId,
  Operation, Constant, Variable, Custom,
  Add, Subtract, Multiply, Divide, Power, Negate,
  Sqrt, Exp, Log, Sin, Cos, Sec, Csc, Tan, Cot, Asin, Acos, Atan,
  Square, Cube, Reciprocal, Increment, Decrement,
  create_operation, ExpressionValidator
)
from .exceptions import ExpressionError, UndefinedVariableError, ArityMismatchError, TreeDepthError
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "evaluate", "differentiate", "clone",
  "ExpressionTreeNode", "CustomFunction", "OpId",
  "Operation", "Constant", "Variable", "Custom",
  "Add", "Subtract", "Multiply", "Divide", "Power", "Negate",
  "Sqrt", "Exp", "Log", "Sin", "Cos", "Sec", "Csc", "Tan", "Cot", "Asin", "Acos", "Atan",
  "Square", "Cube", "Reciprocal", "Increment", "Decrement",
  "create_operation", "ExpressionValidator",
  "ExpressionError", "UndefinedVariableError", "ArityMismatchError", "TreeDepthError",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
