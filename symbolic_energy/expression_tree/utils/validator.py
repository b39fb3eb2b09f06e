from typing import Mapping, Optional
from ..core.node import ExpressionTreeNode
from .tree_utils import calculate_tree_depth, validate_tree_structure, get_variables
from ...exceptions import TreeDepthError
from ...logging_system import log_warning

# Depth bound for expressions accepted from outside. evaluate, evaluate_batch
# and to_string recurse once per level; copy, size, differentiate, == and hash
# are iterative. 400 levels fit the default recursion limit.
MAX_TREE_DEPTH = 400


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: ExpressionTreeNode, max_depth: int = MAX_TREE_DEPTH,
                          variables: Optional[Mapping[str, float]] = None) -> bool:
    """
    Check structure, depth and (when variables are given) that every
    variable in the tree has a value. Domain problems such as log of a
    negative number are not checked; they evaluate to NaN.
    """
    if not validate_tree_structure(node):
      log_warning("Rejected expression: operation arity does not match child count")
      return False

    depth = calculate_tree_depth(node)
    if depth > max_depth:
      log_warning(f"Rejected expression: depth {depth} exceeds {max_depth}")
      return False

    if variables is not None:
      missing = get_variables(node) - set(variables)
      if missing:
        log_warning(f"Rejected expression: no values for {sorted(missing)}")
        return False

    return True

  @staticmethod
  def check_depth(node: ExpressionTreeNode, max_depth: int = MAX_TREE_DEPTH) -> int:
    """Return the tree depth, raising TreeDepthError if it exceeds max_depth"""
    depth = calculate_tree_depth(node)
    if depth > max_depth:
      raise TreeDepthError(depth, max_depth)
    return depth
