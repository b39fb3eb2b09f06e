import numpy as np
import pytest

from symbolic_energy import (
  Expression, ExpressionTreeNode, ExpressionValidator, LogLevel, TreeDepthError, configure_logging,
  Constant, Variable, Custom, Add, Multiply, Negate, Sin, Cos, Square
)
from symbolic_energy.logging_system import get_logger, set_log_level


def var(name):
  return ExpressionTreeNode(Variable(name))


def const(value):
  return ExpressionTreeNode(Constant(value))


def harmonic():
  # 0.5 * k * (r - r0)^2 written with Add/Negate
  return Expression(ExpressionTreeNode(
    Multiply(),
    ExpressionTreeNode(Multiply(), const(0.5), var('k')),
    ExpressionTreeNode(Square(), ExpressionTreeNode(Add(), var('r'), ExpressionTreeNode(Negate(), var('r0'))))))


def test_evaluate_and_batch():
  expr = harmonic()
  assert expr.evaluate({'k': 2.0, 'r': 1.5, 'r0': 1.0}) == pytest.approx(0.25)
  batch = expr.evaluate_batch({'k': 2.0, 'r': np.array([1.0, 2.0]), 'r0': 1.0})
  np.testing.assert_allclose(batch, [0.0, 1.0])


def test_force_is_negative_gradient():
  expr = harmonic()
  force = Expression(ExpressionTreeNode(Negate(), expr.differentiate('r').get_root()))
  assert force.evaluate({'k': 2.0, 'r': 1.5, 'r0': 1.0}) == pytest.approx(-1.0)


def test_gradient_defaults_to_all_variables():
  gradient = harmonic().gradient()
  assert list(gradient) == ['k', 'r', 'r0']
  point = {'k': 2.0, 'r': 1.5, 'r0': 1.0}
  assert gradient['r'].evaluate(point) == pytest.approx(-gradient['r0'].evaluate(point))
  assert gradient['k'].evaluate(point) == pytest.approx(0.125)


def test_variables_rename_and_copy():
  expr = harmonic()
  assert expr.get_variables() == {'k', 'r', 'r0'}
  renamed = expr.rename_variables({'r': 'd'})
  assert renamed.get_variables() == {'k', 'd', 'r0'}
  copy = expr.copy()
  assert copy == expr
  assert copy.get_root() is not expr.get_root()


def test_equality_and_hash():
  first = Expression(ExpressionTreeNode(Sin(), var('x')))
  second = Expression(ExpressionTreeNode(Sin(), var('x')))
  third = Expression(ExpressionTreeNode(Cos(), var('x')))
  assert first == second
  assert hash(first) == hash(second)
  assert first != third
  assert len({first, second, third}) == 2
  assert first != first.get_root()


def test_size_and_depth():
  expr = harmonic()
  assert expr.size() == 9
  assert expr.depth() == 5
  assert expr.check_depth() == 5
  with pytest.raises(TreeDepthError):
    expr.check_depth(max_depth=3)


def test_string_forms():
  expr = Expression(ExpressionTreeNode(Add(), var('x'), const(2.5)))
  assert expr.to_string() == "(x + 2.5)"
  assert repr(expr) == "Expression((x + 2.5))"
  assert str(expr.to_sympy()) == "x + 2.5"


def test_differentiation_is_logged_in_verbose_mode(capsys):
  try:
    configure_logging(LogLevel.VERBOSE)
    Expression(ExpressionTreeNode(Sin(), var('x'))).differentiate('x')
    output = capsys.readouterr().out
    assert "Differentiated with respect to 'x'" in output
    assert "2 -> 4 nodes" in output
  finally:
    configure_logging(LogLevel.SILENT)


def test_batch_custom_fallback_is_logged(capsys, scaled_sine):
  try:
    configure_logging(LogLevel.VERBOSE)
    tree = ExpressionTreeNode(Custom('g', scaled_sine), var('x'))
    tree.evaluate_batch({'x': np.array([0.0, 1.0])})
    assert "custom function 'g'" in capsys.readouterr().out
  finally:
    configure_logging(LogLevel.SILENT)


def test_silent_by_default_in_tests(capsys):
  Expression(ExpressionTreeNode(Sin(), var('x'))).differentiate('x')
  assert capsys.readouterr().out == ""


def test_set_log_level_changes_threshold(capsys):
  try:
    configure_logging(LogLevel.MINIMAL)
    get_logger().debug("hidden")
    set_log_level(LogLevel.VERBOSE)
    get_logger().debug("shown")
    output = capsys.readouterr().out
    assert "hidden" not in output
    assert "DEBUG: shown" in output
  finally:
    configure_logging(LogLevel.SILENT)


def test_validator_rejection_is_a_warning(capsys):
  try:
    configure_logging(LogLevel.MINIMAL)
    expr = Expression(ExpressionTreeNode(Sin(), var('x')))
    assert not ExpressionValidator.is_valid_expression(expr.get_root(), variables={})
    output = capsys.readouterr().out
    assert "WARNING - Rejected expression: no values for ['x']" in output
  finally:
    configure_logging(LogLevel.SILENT)
