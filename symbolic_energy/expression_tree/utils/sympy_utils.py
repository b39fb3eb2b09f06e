import sympy as sp
from typing import Callable, Mapping
from ..core.node import ExpressionTreeNode
from ..core.operators import OpId
from .tree_utils import get_variables, find_nodes_by_id


def to_sympy(node: ExpressionTreeNode) -> sp.Expr:
  """
  Convert an expression tree into an equivalent SymPy expression.

  Custom functions become undefined SymPy functions of the same name. A
  custom derivative gets its order vector appended to the name, so the
  d/da0 of f(a0, a1) is printed as f_1_0(a0, a1).
  """
  operation = node.operation
  op_id = operation.get_id()
  args = [to_sympy(child) for child in node.children]

  if op_id == OpId.CONSTANT:
    value = operation.get_value()
    if value.is_integer():
      return sp.Integer(int(value))
    return sp.Float(value)
  elif op_id == OpId.VARIABLE:
    return sp.Symbol(operation.get_name())
  elif op_id == OpId.CUSTOM:
    name = operation.get_name()
    if operation.is_derivative():
      name += '_' + '_'.join(str(order) for order in operation.get_derivative_order())
    return sp.Function(name)(*args)
  elif op_id == OpId.ADD:
    return sp.Add(args[0], args[1])
  elif op_id == OpId.SUBTRACT:
    return sp.Add(args[0], sp.Mul(-1, args[1]))
  elif op_id == OpId.MULTIPLY:
    return sp.Mul(args[0], args[1])
  elif op_id == OpId.DIVIDE:
    return sp.Mul(args[0], sp.Pow(args[1], -1))
  elif op_id == OpId.POWER:
    return sp.Pow(args[0], args[1])
  elif op_id == OpId.NEGATE:
    return -args[0]
  elif op_id == OpId.SQRT:
    return sp.sqrt(args[0])
  elif op_id == OpId.EXP:
    return sp.exp(args[0])
  elif op_id == OpId.LOG:
    return sp.log(args[0])
  elif op_id == OpId.SIN:
    return sp.sin(args[0])
  elif op_id == OpId.COS:
    return sp.cos(args[0])
  elif op_id == OpId.SEC:
    return sp.sec(args[0])
  elif op_id == OpId.CSC:
    return sp.csc(args[0])
  elif op_id == OpId.TAN:
    return sp.tan(args[0])
  elif op_id == OpId.COT:
    return sp.cot(args[0])
  elif op_id == OpId.ASIN:
    return sp.asin(args[0])
  elif op_id == OpId.ACOS:
    return sp.acos(args[0])
  elif op_id == OpId.ATAN:
    return sp.atan(args[0])
  elif op_id == OpId.SQUARE:
    return args[0]**2
  elif op_id == OpId.CUBE:
    return args[0]**3
  elif op_id == OpId.RECIPROCAL:
    return sp.Pow(args[0], -1)
  elif op_id == OpId.INCREMENT:
    return args[0] + 1
  elif op_id == OpId.DECREMENT:
    return args[0] - 1
  else:
    raise ValueError(f"to_sympy reached unexpected operation: {operation.get_name()}")


def sympy_derivative(node: ExpressionTreeNode, variable: str) -> sp.Expr:
  """SymPy's own derivative of the converted tree, for cross-checking"""
  return sp.diff(to_sympy(node), sp.Symbol(variable))


def lambdify_expression(node: ExpressionTreeNode) -> Callable[[Mapping[str, object]], object]:
  """
  Build a numpy callable taking a mapping of variable values.

  Only trees without custom functions can be lambdified.
  """
  if find_nodes_by_id(node, OpId.CUSTOM):
    raise ValueError("Cannot lambdify an expression containing custom functions")
  names = sorted(get_variables(node))
  symbols = [sp.Symbol(name) for name in names]
  lambda_func = sp.lambdify(symbols, to_sympy(node), modules='numpy')

  def wrapper(variables):
    return lambda_func(*(variables[name] for name in names))
  return wrapper


def latex_representation(node: ExpressionTreeNode) -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(to_sympy(node))
