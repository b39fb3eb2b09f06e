"""
Tree Utility Functions

Traversal and analysis helpers for expression trees. Traversals are
iterative so they also work on trees too deep to evaluate recursively.
"""

from collections import deque
from typing import List, Dict, Set, Mapping, cast

from ..core.node import ExpressionTreeNode
from ..core.operation import Operation, Variable, Custom
from ..core.operators import OpId


def get_all_nodes(node: ExpressionTreeNode, traversal_order: str = 'breadth_first') -> List[ExpressionTreeNode]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first' (pre-order)

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: ExpressionTreeNode) -> List[ExpressionTreeNode]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children)

    return all_nodes


def _depth_first_traversal(node: ExpressionTreeNode) -> List[ExpressionTreeNode]:
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        # Reversed so children come out left to right
        stack.extend(reversed(current_node.children))

    return all_nodes


def calculate_tree_depth(node: ExpressionTreeNode) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    stack = [(node, 1)]

    while stack:
        current_node, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for child in current_node.children:
            stack.append((child, depth + 1))

    return max_depth


def find_nodes_by_id(node: ExpressionTreeNode, op_id: OpId) -> List[ExpressionTreeNode]:
    """Find all nodes whose operation has the given discriminant."""
    return [n for n in get_all_nodes(node) if n.operation.get_id() == op_id]


def get_variables(node: ExpressionTreeNode) -> Set[str]:
    """Names of all variables referenced in the tree."""
    return {n.operation.get_name() for n in find_nodes_by_id(node, OpId.VARIABLE)}


def get_variable_usage_counts(node: ExpressionTreeNode) -> Dict[str, int]:
    """
    Count the usage frequency of each variable in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Dictionary mapping variable names to their usage counts
    """
    usage_counts: Dict[str, int] = {}
    for var_node in find_nodes_by_id(node, OpId.VARIABLE):
        name = var_node.operation.get_name()
        usage_counts[name] = usage_counts.get(name, 0) + 1
    return usage_counts


def get_custom_operations(node: ExpressionTreeNode) -> List[Custom]:
    """All Custom operations in the tree, in breadth-first order."""
    return [cast(Custom, n.operation) for n in find_nodes_by_id(node, OpId.CUSTOM)]


def rename_variables(node: ExpressionTreeNode, replacements: Mapping[str, str]) -> ExpressionTreeNode:
    """
    Create a copy of the tree with some variables renamed.

    Args:
        node: Root node of the tree
        replacements: old variable name -> new variable name; variables not
            listed keep their names

    Returns:
        New tree sharing nothing with the original
    """
    operation = node.operation
    if operation.get_id() == OpId.VARIABLE and operation.get_name() in replacements:
        return ExpressionTreeNode(Variable(replacements[operation.get_name()]))
    children = [rename_variables(child, replacements) for child in node.children]
    return ExpressionTreeNode(operation.clone(), *children)


def clone_tree(node: ExpressionTreeNode) -> ExpressionTreeNode:
    """
    Create a deep copy of the entire tree.

    Args:
        node: Root node of the tree to clone

    Returns:
        Deep copy of the tree
    """
    return node.copy()


def validate_tree_structure(node: ExpressionTreeNode) -> bool:
    """
    Validate that every node holds an Operation and the right number of children.

    Construction already enforces arity; this guards trees assembled by
    other means (deserialized, or edited through the attributes).
    """
    stack = [node]
    while stack:
        current_node = stack.pop()
        if not isinstance(current_node, ExpressionTreeNode):
            return False
        operation = current_node.operation
        if not isinstance(operation, Operation):
            return False
        if len(current_node.children) != operation.get_num_arguments():
            return False
        stack.extend(current_node.children)
    return True
