"""Errors raised by expression construction, validation and evaluation."""


class ExpressionError(Exception):
  """Base class for all expression errors"""


class UndefinedVariableError(ExpressionError, KeyError):
  """A Variable node's name is missing from the evaluation bindings"""

  def __init__(self, variable: str):
    super().__init__(variable)
    self.variable = variable

  def __str__(self) -> str:
    return f"No value specified for variable '{self.variable}'"


class ArityMismatchError(ExpressionError, ValueError):
  """A node was built with the wrong number of children for its operation"""

  def __init__(self, operation_name: str, expected: int, actual: int):
    super().__init__(
      f"Operation '{operation_name}' takes {expected} argument(s) but {actual} were supplied")
    self.operation_name = operation_name
    self.expected = expected
    self.actual = actual


class TreeDepthError(ExpressionError, ValueError):
  """Tree is deeper than the caller's recursion bound"""

  def __init__(self, depth: int, max_depth: int):
    super().__init__(f"Expression depth {depth} exceeds the limit of {max_depth}")
    self.depth = depth
    self.max_depth = max_depth
