"""
Numerical derivative checks

Central finite differences used to verify analytic derivative trees.
"""

import math
from typing import Iterable, Mapping, Optional

import numpy as np

from ..core.node import ExpressionTreeNode

# Step is sqrt(machine eps) scaled by the magnitude of the point
DEFAULT_RELATIVE_STEP = math.sqrt(np.finfo(float).eps)


def central_difference(node: ExpressionTreeNode, variables: Mapping[str, float], variable: str,
                       step: Optional[float] = None) -> float:
    """
    Approximate the partial derivative of node with respect to variable.

    Args:
        node: Tree to differentiate
        variables: Point at which to estimate the derivative
        variable: Name of the variable to perturb
        step: Absolute step; defaults to DEFAULT_RELATIVE_STEP * max(|x|, 1)

    Returns:
        (f(x + h) - f(x - h)) / 2h
    """
    x = float(variables[variable])
    if step is None:
        step = DEFAULT_RELATIVE_STEP * max(abs(x), 1.0)
    forward = dict(variables)
    backward = dict(variables)
    forward[variable] = x + step
    backward[variable] = x - step
    return (node.evaluate(forward) - node.evaluate(backward)) / (2.0 * step)


def derivative_error(node: ExpressionTreeNode, variable: str,
                     points: Iterable[Mapping[str, float]],
                     derivative: Optional[ExpressionTreeNode] = None) -> float:
    """
    Largest absolute difference between the analytic derivative and a
    central difference estimate over the given points.

    Points where either value is not finite are skipped.
    """
    if derivative is None:
        derivative = node.differentiate(variable)
    worst = 0.0
    for point in points:
        analytic = derivative.evaluate(point)
        numeric = central_difference(node, point, variable)
        if not (np.isfinite(analytic) and np.isfinite(numeric)):
            continue
        worst = max(worst, abs(analytic - numeric))
    return worst
