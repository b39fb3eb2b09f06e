from abc import ABC, abstractmethod
from typing import Sequence


class CustomFunction(ABC):
  """
  A user-supplied function that can appear inside an expression.

  Implementations are owned by the surrounding engine (tabulated potentials,
  user-defined analytic forms, ...). The expression core stores one cloned
  instance per Custom operation and calls back into it during evaluation.

  Expressions holding custom functions compare equal only when the functions
  do. Define __eq__ and __hash__ over the parameters that determine the
  function's values; without them a clone never equals its source.
  """

  @abstractmethod
  def get_num_arguments(self) -> int:
    """Number of arguments the function takes"""

  @abstractmethod
  def evaluate(self, arguments: Sequence[float]) -> float:
    """Value of the function at the given arguments"""

  @abstractmethod
  def evaluate_derivative(self, arguments: Sequence[float], derivative_order: Sequence[int]) -> float:
    """
    Mixed partial derivative at the given arguments.

    derivative_order[i] is how many times to differentiate with respect to
    argument i, so [1, 0] is df/da0 and [1, 1] is d2f/da0da1.
    """

  @abstractmethod
  def clone(self) -> 'CustomFunction':
    """Independent copy; must not share mutable state with self"""
