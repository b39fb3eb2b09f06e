import numpy as np
import numba
from enum import IntEnum

class OpId(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  CUSTOM = 2
  # Binary ops
  ADD = 3
  SUBTRACT = 4
  MULTIPLY = 5
  DIVIDE = 6
  POWER = 7
  # Unary ops
  NEGATE = 8
  SQRT = 9
  EXP = 10
  LOG = 11
  SIN = 12
  COS = 13
  SEC = 14
  CSC = 15
  TAN = 16
  COT = 17
  ASIN = 18
  ACOS = 19
  ATAN = 20
  SQUARE = 21
  CUBE = 22
  RECIPROCAL = 23
  INCREMENT = 24
  DECREMENT = 25

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpId.ADD, '-': OpId.SUBTRACT, '*': OpId.MULTIPLY, '/': OpId.DIVIDE, '^': OpId.POWER}
UNARY_OP_MAP = {
    '-': OpId.NEGATE,
    'sqrt': OpId.SQRT, 'exp': OpId.EXP, 'log': OpId.LOG,
    'sin': OpId.SIN, 'cos': OpId.COS, 'sec': OpId.SEC, 'csc': OpId.CSC,
    'tan': OpId.TAN, 'cot': OpId.COT,
    'asin': OpId.ASIN, 'acos': OpId.ACOS, 'atan': OpId.ATAN,
    'square': OpId.SQUARE, 'cube': OpId.CUBE, 'recip': OpId.RECIPROCAL,
    'increment': OpId.INCREMENT, 'decrement': OpId.DECREMENT
}

# Fixed arities; CUSTOM takes the wrapped function's arity
OP_ARITY = {OpId.CONSTANT: 0, OpId.VARIABLE: 0}
OP_ARITY.update({op_id: 2 for op_id in BINARY_OP_MAP.values()})
OP_ARITY.update({op_id: 1 for op_id in UNARY_OP_MAP.values()})

@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

# error_model='numpy' gives IEEE results for x/0 instead of ZeroDivisionError.
# fastmath is off so inf and NaN survive.
@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op_fast(left_val, right_val, op_type):
  if op_type == OpId.ADD:
    return left_val + right_val
  elif op_type == OpId.SUBTRACT:
    return left_val - right_val
  elif op_type == OpId.MULTIPLY:
    return left_val * right_val
  elif op_type == OpId.DIVIDE:
    return left_val / right_val
  elif op_type == OpId.POWER:
    return np.power(left_val, right_val)
  return np.full_like(left_val, np.nan)

@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_op_fast(operand_val, op_type):
  if op_type == OpId.NEGATE:
    return -operand_val
  elif op_type == OpId.SQRT:
    return np.sqrt(operand_val)
  elif op_type == OpId.EXP:
    return np.exp(operand_val)
  elif op_type == OpId.LOG:
    return np.log(operand_val)
  elif op_type == OpId.SIN:
    return np.sin(operand_val)
  elif op_type == OpId.COS:
    return np.cos(operand_val)
  elif op_type == OpId.SEC:
    return 1.0 / np.cos(operand_val)
  elif op_type == OpId.CSC:
    return 1.0 / np.sin(operand_val)
  elif op_type == OpId.TAN:
    return np.tan(operand_val)
  elif op_type == OpId.COT:
    return 1.0 / np.tan(operand_val)
  elif op_type == OpId.ASIN:
    return np.arcsin(operand_val)
  elif op_type == OpId.ACOS:
    return np.arccos(operand_val)
  elif op_type == OpId.ATAN:
    return np.arctan(operand_val)
  elif op_type == OpId.SQUARE:
    return operand_val * operand_val
  elif op_type == OpId.CUBE:
    return operand_val * operand_val * operand_val
  elif op_type == OpId.RECIPROCAL:
    return 1.0 / operand_val
  elif op_type == OpId.INCREMENT:
    return operand_val + 1.0
  elif op_type == OpId.DECREMENT:
    return operand_val - 1.0
  return np.full_like(operand_val, np.nan)
