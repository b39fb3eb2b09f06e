import math

import numpy as np
import pytest

from symbolic_energy import (
  ExpressionTreeNode, OpId, ArityMismatchError, UndefinedVariableError,
  Constant, Variable, Custom,
  Add, Subtract, Multiply, Divide, Power, Negate,
  Sqrt, Exp, Log, Sin, Cos, Sec, Csc, Tan, Cot, Asin, Acos, Atan,
  Square, Cube, Reciprocal, Increment, Decrement, create_operation
)
from symbolic_energy.expression_tree import OPERATION_TYPES, ALL_OPERATION_TYPES

EXPECTED_ARITY = {
  Add: 2, Subtract: 2, Multiply: 2, Divide: 2, Power: 2,
  Negate: 1, Sqrt: 1, Exp: 1, Log: 1, Sin: 1, Cos: 1, Sec: 1, Csc: 1,
  Tan: 1, Cot: 1, Asin: 1, Acos: 1, Atan: 1, Square: 1, Cube: 1,
  Reciprocal: 1, Increment: 1, Decrement: 1,
}


def test_builtin_arity_table():
  for op_type, arity in EXPECTED_ARITY.items():
    assert op_type().get_num_arguments() == arity, op_type.__name__
  assert Constant(1.0).get_num_arguments() == 0
  assert Variable('x').get_num_arguments() == 0


def test_custom_arity_follows_function(quadratic_product, scaled_sine, constant_function):
  assert Custom('f', quadratic_product).get_num_arguments() == 2
  assert Custom('g', scaled_sine).get_num_arguments() == 1
  assert Custom('c', constant_function).get_num_arguments() == 0


def test_discriminants_are_unique():
  assert len(ALL_OPERATION_TYPES) == 26
  ids = [op_type.ID for op_type in ALL_OPERATION_TYPES]
  assert len(set(ids)) == 26
  assert set(ids) == set(OpId)


def test_log_and_sin_have_their_own_discriminants():
  assert Log().get_id() == OpId.LOG
  assert Sin().get_id() == OpId.SIN
  assert Log().get_id() != Sqrt().get_id()
  assert Sin().get_id() != Log().get_id()


def test_payload_operations_report_their_ids(quadratic_product):
  assert Constant(2.0).get_id() == OpId.CONSTANT
  assert Variable('x').get_id() == OpId.VARIABLE
  assert Custom('f', quadratic_product).get_id() == OpId.CUSTOM


@pytest.mark.parametrize("op_type", list(OPERATION_TYPES.values()))
def test_wrong_child_count_is_rejected(op_type):
  x = ExpressionTreeNode(Variable('x'))
  arity = op_type().get_num_arguments()
  for count in (0, 1, 2, 3):
    if count == arity:
      continue
    with pytest.raises(ArityMismatchError) as excinfo:
      ExpressionTreeNode(op_type(), *([x] * count))
    assert excinfo.value.expected == arity
    assert excinfo.value.actual == count


def test_leaf_with_children_is_rejected():
  x = ExpressionTreeNode(Variable('x'))
  with pytest.raises(ArityMismatchError):
    ExpressionTreeNode(Constant(1.0), x)
  with pytest.raises(ValueError):
    ExpressionTreeNode(Variable('y'), x)


def test_custom_with_wrong_child_count_is_rejected(quadratic_product):
  x = ExpressionTreeNode(Variable('x'))
  with pytest.raises(ArityMismatchError):
    ExpressionTreeNode(Custom('f', quadratic_product), x)


@pytest.mark.parametrize("operation, args, expected", [
  (Add(), [1.5, 2.0], 3.5),
  (Subtract(), [1.5, 2.0], -0.5),
  (Multiply(), [1.5, 2.0], 3.0),
  (Divide(), [3.0, 4.0], 0.75),
  (Power(), [2.0, 3.0], 8.0),
  (Negate(), [2.5], -2.5),
  (Sqrt(), [9.0], 3.0),
  (Exp(), [1.0], math.e),
  (Log(), [1.0], 0.0),
  (Sin(), [0.5], math.sin(0.5)),
  (Cos(), [0.5], math.cos(0.5)),
  (Sec(), [0.5], 1.0 / math.cos(0.5)),
  (Csc(), [0.5], 1.0 / math.sin(0.5)),
  (Tan(), [0.5], math.tan(0.5)),
  (Cot(), [0.5], 1.0 / math.tan(0.5)),
  (Asin(), [0.5], math.asin(0.5)),
  (Acos(), [0.5], math.acos(0.5)),
  (Atan(), [0.5], math.atan(0.5)),
  (Square(), [3.0], 9.0),
  (Cube(), [-2.0], -8.0),
  (Reciprocal(), [4.0], 0.25),
  (Increment(), [4.0], 5.0),
  (Decrement(), [4.0], 3.0),
])
def test_builtin_evaluate(operation, args, expected):
  result = operation.evaluate(np.array(args, dtype=np.float64), {})
  assert result == pytest.approx(expected, rel=1e-14, abs=1e-15)


def test_constant_and_variable_evaluate():
  empty = np.empty(0, dtype=np.float64)
  assert Constant(2.5).evaluate(empty, {}) == 2.5
  assert Variable('x').evaluate(empty, {'x': 4.0}) == 4.0


def test_missing_variable_raises():
  with pytest.raises(UndefinedVariableError) as excinfo:
    Variable('r').evaluate(np.empty(0), {'x': 1.0})
  assert excinfo.value.variable == 'r'
  assert "'r'" in str(excinfo.value)
  # Also a KeyError for callers that catch lookups generically
  assert isinstance(excinfo.value, KeyError)


def test_display_names(quadratic_product):
  assert Add().get_name() == '+'
  assert Subtract().get_name() == '-'
  assert Negate().get_name() == '-'
  assert Power().get_name() == '^'
  assert Reciprocal().get_name() == 'recip'
  assert Sqrt().get_name() == 'sqrt'
  assert Constant(2.0).get_name() == '2'
  assert Constant(0.5).get_name() == '0.5'
  assert Variable('r12').get_name() == 'r12'
  assert Custom('table', quadratic_product).get_name() == 'table'


def test_infix_and_symmetric_flags():
  for op_type in (Add, Subtract, Multiply, Divide, Power):
    assert op_type().is_infix_operator()
  assert not Sin().is_infix_operator()
  assert Add().is_symmetric() and Multiply().is_symmetric()
  assert not Subtract().is_symmetric()
  assert not Divide().is_symmetric()


def test_clone_is_equal_but_distinct():
  for operation in [Constant(1.25), Variable('x')] + [op_type() for op_type in OPERATION_TYPES.values()]:
    copy = operation.clone()
    assert copy == operation
    assert copy is not operation
    assert hash(copy) == hash(operation)


def test_operation_equality_uses_payload():
  assert Constant(1.0) != Constant(2.0)
  assert Variable('x') != Variable('y')
  assert Add() != Multiply()
  assert Subtract() != Negate()


def test_create_operation_by_name():
  assert isinstance(create_operation('-', 2), Subtract)
  assert isinstance(create_operation('-', 1), Negate)
  assert isinstance(create_operation('^', 2), Power)
  assert isinstance(create_operation('recip', 1), Reciprocal)
  assert isinstance(create_operation('acos', 1), Acos)
  with pytest.raises(ValueError):
    create_operation('sin', 2)
  with pytest.raises(ValueError):
    create_operation('erf', 1)
