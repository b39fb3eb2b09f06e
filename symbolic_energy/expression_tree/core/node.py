import numpy as np
from typing import Dict, List, Optional, Mapping, Tuple, TYPE_CHECKING
from ...exceptions import ArityMismatchError

if TYPE_CHECKING:
  from .operation import Operation


class ExpressionTreeNode:
  """
  One node of a parsed expression: an Operation plus its ordered children.

  The child count always equals operation.get_num_arguments(). Nodes are
  never modified after construction; evaluate() and differentiate() only
  read the tree.
  """

  __slots__ = ('operation', 'children', '_hash_cache', '_size_cache')

  def __init__(self, operation: 'Operation', *children: 'ExpressionTreeNode'):
    expected = operation.get_num_arguments()
    if len(children) != expected:
      raise ArityMismatchError(operation.get_name(), expected, len(children))
    self.operation = operation
    self.children: Tuple['ExpressionTreeNode', ...] = children
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  def get_operation(self) -> 'Operation':
    return self.operation

  def get_children(self) -> Tuple['ExpressionTreeNode', ...]:
    return self.children

  def evaluate(self, variables: Optional[Mapping[str, float]] = None) -> float:
    """
    Evaluate the tree for the given variable values.

    Follows float64 semantics: division by zero, log of a non-positive
    number and similar produce inf or NaN without warnings.

    Raises:
        UndefinedVariableError: a variable in the tree has no value
    """
    if variables is None:
      variables = {}
    with np.errstate(all='ignore'):
      return float(self._evaluate(variables))

  def _evaluate(self, variables: Mapping[str, float]):
    args = np.empty(len(self.children), dtype=np.float64)
    for i, child in enumerate(self.children):
      args[i] = child._evaluate(variables)
    return self.operation.evaluate(args, variables)

  def evaluate_batch(self, variables: Optional[Mapping[str, object]] = None) -> np.ndarray:
    """
    Evaluate the tree over many samples at once.

    Each variable maps to a 1-D array or a scalar; all values are broadcast
    to a common length. Returns a float64 array with one value per sample.
    """
    if variables is None:
      variables = {}
    n_samples = _count_samples(variables)
    with np.errstate(all='ignore'):
      return self._evaluate_vector(variables, n_samples)

  def _evaluate_vector(self, variables: Mapping[str, object], n_samples: int) -> np.ndarray:
    args = []
    for child in self.children:
      args.append(child._evaluate_vector(variables, n_samples))
    return self.operation.evaluate_vector(args, variables, n_samples)

  def differentiate(self, variable: str) -> 'ExpressionTreeNode':
    """
    New tree for the partial derivative with respect to variable.

    Works bottom-up without recursion. Each source node is copied once and
    the copies are what the differentiation rules build on, so the result
    shares nothing with this tree.
    """
    copies: Dict[int, ExpressionTreeNode] = {}
    derivatives: Dict[int, ExpressionTreeNode] = {}
    for node in _post_order(self):
      children = [copies[id(child)] for child in node.children]
      child_derivs = [derivatives[id(child)] for child in node.children]
      copies[id(node)] = ExpressionTreeNode(node.operation.clone(), *children)
      derivatives[id(node)] = node.operation.differentiate(children, child_derivs, variable)
    return derivatives[id(self)]

  def copy(self) -> 'ExpressionTreeNode':
    copies: Dict[int, ExpressionTreeNode] = {}
    for node in _post_order(self):
      children = [copies[id(child)] for child in node.children]
      copies[id(node)] = ExpressionTreeNode(node.operation.clone(), *children)
    return copies[id(self)]

  def to_string(self) -> str:
    name = self.operation.get_name()
    if not self.children:
      return name
    args = []
    for child in self.children:
      args.append(child.to_string())
    if self.operation.is_infix_operator():
      return f"({args[0]} {name} {args[1]})"
    return f"{name}({', '.join(args)})"

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      for node in _post_order(self):
        if node._size_cache is None:
          node._size_cache = 1 + sum(child._size_cache for child in node.children)
    return self._size_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, ExpressionTreeNode):
      return False
    pairs = [(self, other)]
    while pairs:
      left, right = pairs.pop()
      if left is right:
        continue
      if left.operation != right.operation or len(left.children) != len(right.children):
        return False
      pairs.extend(zip(left.children, right.children))
    return True

  def __hash__(self) -> int:
    if self._hash_cache is None:
      for node in _post_order(self):
        if node._hash_cache is None:
          child_hashes = tuple(child._hash_cache for child in node.children)
          node._hash_cache = hash((node.operation, child_hashes))
    return self._hash_cache

  def __repr__(self) -> str:
    return f"ExpressionTreeNode({self.to_string()})"


def _count_samples(variables: Mapping[str, object]) -> int:
  shapes = [np.shape(value) for value in variables.values()]
  shape = np.broadcast_shapes(*shapes) if shapes else ()
  if len(shape) > 1:
    raise ValueError(f"Variable values must be scalars or 1-D arrays, got shape {shape}")
  return shape[0] if shape else 1


def _post_order(root: ExpressionTreeNode) -> List[ExpressionTreeNode]:
  """Every node once, children before their parent, left to right"""
  order = []
  visited = set()
  stack = [(root, False)]
  while stack:
    node, expanded = stack.pop()
    if expanded:
      order.append(node)
    elif id(node) not in visited:
      visited.add(id(node))
      stack.append((node, True))
      stack.extend((child, False) for child in reversed(node.children))
  return order
