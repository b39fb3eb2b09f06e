"""Utilities for expression trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_id,
    get_variables, get_variable_usage_counts, get_custom_operations,
    rename_variables, clone_tree, validate_tree_structure
)
from .validator import ExpressionValidator, MAX_TREE_DEPTH
from .sympy_utils import to_sympy, sympy_derivative, lambdify_expression, latex_representation
from .numerical import central_difference, derivative_error, DEFAULT_RELATIVE_STEP

__all__ = [
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_id',
    'get_variables', 'get_variable_usage_counts', 'get_custom_operations',
    'rename_variables', 'clone_tree', 'validate_tree_structure',
    'ExpressionValidator', 'MAX_TREE_DEPTH',
    'to_sympy', 'sympy_derivative', 'lambdify_expression', 'latex_representation',
    'central_difference', 'derivative_error', 'DEFAULT_RELATIVE_STEP'
]
