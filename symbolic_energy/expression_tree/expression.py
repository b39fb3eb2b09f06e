import numpy as np
import sympy as sp
from typing import Dict, Iterable, Mapping, Optional, Set, Union
from .core.node import ExpressionTreeNode
from .utils.tree_utils import calculate_tree_depth, get_variables, rename_variables
from .utils.sympy_utils import to_sympy
from .utils.validator import ExpressionValidator, MAX_TREE_DEPTH
from ..logging_system import log_debug


class Expression:
  """
  A parsed expression ready for repeated evaluation.

  Wraps the root ExpressionTreeNode and caches its string form. Derivatives
  are new Expressions and can be evaluated or differentiated again.
  """

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: ExpressionTreeNode):
    self.root = root
    self._string_cache: Optional[str] = None

  def get_root(self) -> ExpressionTreeNode:
    return self.root

  def evaluate(self, variables: Optional[Mapping[str, float]] = None) -> float:
    return self.root.evaluate(variables)

  def evaluate_batch(self, variables: Optional[Mapping[str, object]] = None) -> np.ndarray:
    return self.root.evaluate_batch(variables)

  def differentiate(self, variable: str) -> 'Expression':
    derivative = self.root.differentiate(variable)
    log_debug(f"Differentiated with respect to '{variable}': "
              f"{self.root.size()} -> {derivative.size()} nodes")
    return Expression(derivative)

  def gradient(self, variables: Optional[Iterable[str]] = None) -> Dict[str, 'Expression']:
    """Partial derivatives by variable name; defaults to every variable in the expression"""
    if variables is None:
      variables = sorted(self.get_variables())
    return {name: self.differentiate(name) for name in variables}

  def copy(self) -> 'Expression':
    return Expression(self.root.copy())

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    return to_sympy(self.root)

  def get_variables(self) -> Set[str]:
    return get_variables(self.root)

  def rename_variables(self, replacements: Mapping[str, str]) -> 'Expression':
    return Expression(rename_variables(self.root, replacements))

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def check_depth(self, max_depth: int = MAX_TREE_DEPTH) -> int:
    return ExpressionValidator.check_depth(self.root, max_depth)

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()})"


Tree = Union[Expression, ExpressionTreeNode]


def evaluate(tree: Tree, variables: Optional[Mapping[str, float]] = None) -> float:
  """Evaluate an Expression or a bare tree under the given bindings"""
  return tree.evaluate(variables)


def differentiate(tree: Tree, variable: str) -> Tree:
  """Derivative with respect to variable, of the same kind as tree"""
  return tree.differentiate(variable)


def clone(tree: Tree) -> Tree:
  """Independent deep copy, of the same kind as tree"""
  return tree.copy()
