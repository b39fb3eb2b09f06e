"""Core expression tree components."""

from .node import ExpressionTreeNode
from .custom_function import CustomFunction
from .operators import (
    OpId, OP_ARITY, BINARY_OP_MAP, UNARY_OP_MAP,
    evaluate_constant, evaluate_binary_op_fast, evaluate_unary_op_fast
)
from .operation import (
    Operation, Constant, Variable, Custom,
    Add, Subtract, Multiply, Divide, Power, Negate,
    Sqrt, Exp, Log, Sin, Cos, Sec, Csc, Tan, Cot, Asin, Acos, Atan,
    Square, Cube, Reciprocal, Increment, Decrement,
    OPERATION_TYPES, ALL_OPERATION_TYPES, create_operation
)

__all__ = [
    'ExpressionTreeNode', 'CustomFunction',
    'OpId', 'OP_ARITY', 'BINARY_OP_MAP', 'UNARY_OP_MAP',
    'evaluate_constant', 'evaluate_binary_op_fast', 'evaluate_unary_op_fast',
    'Operation', 'Constant', 'Variable', 'Custom',
    'Add', 'Subtract', 'Multiply', 'Divide', 'Power', 'Negate',
    'Sqrt', 'Exp', 'Log', 'Sin', 'Cos', 'Sec', 'Csc', 'Tan', 'Cot', 'Asin', 'Acos', 'Atan',
    'Square', 'Cube', 'Reciprocal', 'Increment', 'Decrement',
    'OPERATION_TYPES', 'ALL_OPERATION_TYPES', 'create_operation'
]
