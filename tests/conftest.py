import math

import pytest

from symbolic_energy import CustomFunction, LogLevel, configure_logging


class QuadraticProduct(CustomFunction):
  """f(a, b) = a^2 * b with exact mixed partials of any order"""

  def get_num_arguments(self):
    return 2

  def evaluate(self, arguments):
    a, b = arguments
    return a * a * b

  def evaluate_derivative(self, arguments, derivative_order):
    a, b = arguments
    a_terms = [a * a, 2.0 * a, 2.0]
    b_terms = [b, 1.0]
    i, j = derivative_order
    a_part = a_terms[i] if i < len(a_terms) else 0.0
    b_part = b_terms[j] if j < len(b_terms) else 0.0
    return a_part * b_part

  def clone(self):
    return QuadraticProduct()

  def __eq__(self, other):
    return isinstance(other, QuadraticProduct)

  def __hash__(self):
    return hash(QuadraticProduct)


class ScaledSine(CustomFunction):
  """g(x) = scale * sin(x); scale and the call counter are mutable state"""

  def __init__(self, scale=1.0):
    self.scale = scale
    self.calls = 0

  def get_num_arguments(self):
    return 1

  def evaluate(self, arguments):
    self.calls += 1
    return self.scale * math.sin(arguments[0])

  def evaluate_derivative(self, arguments, derivative_order):
    self.calls += 1
    # sin, cos, -sin, -cos, ...
    phase = derivative_order[0] % 4
    x = arguments[0]
    value = [math.sin(x), math.cos(x), -math.sin(x), -math.cos(x)][phase]
    return self.scale * value

  def clone(self):
    return ScaledSine(self.scale)

  # The call counter is bookkeeping, not part of the function
  def __eq__(self, other):
    return isinstance(other, ScaledSine) and self.scale == other.scale

  def __hash__(self):
    return hash((ScaledSine, self.scale))


class ConstantFunction(CustomFunction):
  """Zero-argument function"""

  def __init__(self, value=2.5):
    self.value = value

  def get_num_arguments(self):
    return 0

  def evaluate(self, arguments):
    return self.value

  def evaluate_derivative(self, arguments, derivative_order):
    return 0.0

  def clone(self):
    return ConstantFunction(self.value)

  def __eq__(self, other):
    return isinstance(other, ConstantFunction) and self.value == other.value

  def __hash__(self):
    return hash((ConstantFunction, self.value))


@pytest.fixture(autouse=True, scope='session')
def silent_logging():
  configure_logging(LogLevel.SILENT)
  yield


@pytest.fixture
def quadratic_product():
  return QuadraticProduct()


@pytest.fixture
def scaled_sine():
  return ScaledSine(2.0)


@pytest.fixture
def constant_function():
  return ConstantFunction(2.5)
