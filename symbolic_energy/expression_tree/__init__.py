"""Expression Tree Module

Expression representation, evaluation and symbolic differentiation.
"""

from .expression import Expression, evaluate, differentiate, clone
from .core import (
    ExpressionTreeNode, CustomFunction,
    OpId, OP_ARITY, BINARY_OP_MAP, UNARY_OP_MAP,
    Operation, Constant, Variable, Custom,
    Add, Subtract, Multiply, Divide, Power, Negate,
    Sqrt, Exp, Log, Sin, Cos, Sec, Csc, Tan, Cot, Asin, Acos, Atan,
    Square, Cube, Reciprocal, Increment, Decrement,
    OPERATION_TYPES, ALL_OPERATION_TYPES, create_operation
)
from .utils import ExpressionValidator, MAX_TREE_DEPTH, to_sympy

__all__ = [
    "Expression", "evaluate", "differentiate", "clone",
    "ExpressionTreeNode", "CustomFunction",
    "OpId", "OP_ARITY", "BINARY_OP_MAP", "UNARY_OP_MAP",
    "Operation", "Constant", "Variable", "Custom",
    "Add", "Subtract", "Multiply", "Divide", "Power", "Negate",
    "Sqrt", "Exp", "Log", "Sin", "Cos", "Sec", "Csc", "Tan", "Cot", "Asin", "Acos", "Atan",
    "Square", "Cube", "Reciprocal", "Increment", "Decrement",
    "OPERATION_TYPES", "ALL_OPERATION_TYPES", "create_operation",
    "ExpressionValidator", "MAX_TREE_DEPTH", "to_sympy"
]
