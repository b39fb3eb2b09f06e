import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Type
from .operators import (
  OpId, OP_ARITY, BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_constant, evaluate_binary_op_fast, evaluate_unary_op_fast
)
from .custom_function import CustomFunction
from .node import ExpressionTreeNode
from ...exceptions import UndefinedVariableError
from ...logging_system import log_debug

Children = Sequence[ExpressionTreeNode]


class Operation(ABC):
  """
  A single step in evaluating an expression: a constant, a variable lookup,
  an operator or a function. Each Operation consumes a fixed number of
  argument values and produces one value.

  Subclasses are immutable value objects. OpId gives every kind a
  discriminant so trees can be analysed with a switch on get_id().
  """

  __slots__ = ()

  NAME: str = ''
  ID: OpId

  def get_name(self) -> str:
    return self.NAME

  def get_id(self) -> OpId:
    return self.ID

  def get_num_arguments(self) -> int:
    return OP_ARITY[self.ID]

  def clone(self) -> 'Operation':
    return type(self)()

  @abstractmethod
  def evaluate(self, args: np.ndarray, variables: Mapping[str, float]) -> float:
    """
    Perform the computation.

    Args:
        args: float64 array holding get_num_arguments() argument values
        variables: values of all variables, only read by Variable
    """

  @abstractmethod
  def differentiate(self, children: Children, child_derivs: Children, variable: str) -> ExpressionTreeNode:
    """
    Build the analytic derivative of this operation with respect to variable.

    Args:
        children: the child nodes
        child_derivs: derivatives of the children with respect to variable
        variable: name of the variable to differentiate by
    """

  def evaluate_vector(self, args: List[np.ndarray], variables: Mapping[str, np.ndarray],
                      n_samples: int) -> np.ndarray:
    """Element-wise evaluation over float64 arrays of length n_samples"""
    if self.get_num_arguments() == 2:
      return evaluate_binary_op_fast(args[0], args[1], self.get_id())
    return evaluate_unary_op_fast(args[0], self.get_id())

  def is_infix_operator(self) -> bool:
    return False

  def is_symmetric(self) -> bool:
    """True if swapping the two arguments never changes the result"""
    return False

  def _key(self) -> tuple:
    return (self.get_id(),)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Operation):
      return False
    return self._key() == other._key()

  def __hash__(self) -> int:
    return hash(self._key())

  def __repr__(self) -> str:
    return f"{type(self).__name__}()"


# Tree building helpers for the differentiation rules

def _node(operation: Operation, *children: ExpressionTreeNode) -> ExpressionTreeNode:
  return ExpressionTreeNode(operation, *children)


def _constant(value: float) -> ExpressionTreeNode:
  return ExpressionTreeNode(Constant(value))


def _is_zero(node: ExpressionTreeNode) -> bool:
  """
  True if node is symbolically zero: the zero constant, or a sum, difference,
  product, negation or quotient that is zero because of it. Derivatives of
  subtrees that do not depend on the variable always have this form.
  """
  op_id = node.operation.get_id()
  children = node.children
  if op_id == OpId.CONSTANT:
    return node.operation.value == 0.0
  if op_id in (OpId.ADD, OpId.SUBTRACT):
    return _is_zero(children[0]) and _is_zero(children[1])
  if op_id == OpId.MULTIPLY:
    return _is_zero(children[0]) or _is_zero(children[1])
  if op_id in (OpId.NEGATE, OpId.DIVIDE):
    return _is_zero(children[0])
  return False


class Constant(Operation):
  __slots__ = ('value',)

  ID = OpId.CONSTANT

  def __init__(self, value: float):
    self.value = float(value)

  def get_name(self) -> str:
    return np.format_float_positional(self.value, trim='-')

  def get_value(self) -> float:
    return self.value

  def clone(self) -> 'Constant':
    return Constant(self.value)

  def evaluate(self, args, variables):
    return self.value

  def evaluate_vector(self, args, variables, n_samples):
    return evaluate_constant(n_samples, self.value)

  def differentiate(self, children, child_derivs, variable):
    return _constant(0.0)

  def _key(self):
    return (self.ID, self.value)

  def __repr__(self):
    return f"Constant({self.value!r})"


class Variable(Operation):
  __slots__ = ('name',)

  ID = OpId.VARIABLE

  def __init__(self, name: str):
    self.name = name

  def get_name(self) -> str:
    return self.name

  def clone(self) -> 'Variable':
    return Variable(self.name)

  def evaluate(self, args, variables):
    try:
      return variables[self.name]
    except KeyError:
      raise UndefinedVariableError(self.name) from None

  def evaluate_vector(self, args, variables, n_samples):
    value = self.evaluate(args, variables)
    values = np.broadcast_to(np.asarray(value, dtype=np.float64), (n_samples,))
    return np.ascontiguousarray(values)

  def differentiate(self, children, child_derivs, variable):
    return _constant(1.0 if self.name == variable else 0.0)

  def _key(self):
    return (self.ID, self.name)

  def __repr__(self):
    return f"Variable({self.name!r})"


class Custom(Operation):
  """
  Wraps a user-supplied CustomFunction.

  derivative_order[i] counts how many times the function has been
  differentiated with respect to argument i. A nonzero entry makes this
  operation evaluate that mixed partial derivative instead of the function
  itself. The wrapped function is cloned on construction, so each Custom
  owns its instance.

  Two Custom operations are equal when their names, derivative orders and
  functions are equal. Functions compare by identity unless the
  CustomFunction defines __eq__ and __hash__.
  """

  __slots__ = ('name', 'function', 'derivative_order')

  ID = OpId.CUSTOM

  def __init__(self, name: str, function: CustomFunction,
               derivative_order: Optional[Sequence[int]] = None):
    n_args = function.get_num_arguments()
    if derivative_order is None:
      derivative_order = (0,) * n_args
    if len(derivative_order) != n_args:
      raise ValueError(f"Custom function '{name}' takes {n_args} argument(s) "
                       f"but derivative order has {len(derivative_order)} entries")
    self.name = name
    self.function = function.clone()
    self.derivative_order: Tuple[int, ...] = tuple(int(order) for order in derivative_order)

  def get_name(self) -> str:
    return self.name

  def get_num_arguments(self) -> int:
    return self.function.get_num_arguments()

  def get_function(self) -> CustomFunction:
    return self.function

  def get_derivative_order(self) -> Tuple[int, ...]:
    return self.derivative_order

  def is_derivative(self) -> bool:
    return any(self.derivative_order)

  def clone(self) -> 'Custom':
    return Custom(self.name, self.function, self.derivative_order)

  def with_derivative(self, index: int) -> 'Custom':
    """Partial derivative of this operation with respect to argument index"""
    order = list(self.derivative_order)
    order[index] += 1
    return Custom(self.name, self.function, order)

  def evaluate(self, args, variables):
    if self.is_derivative():
      return self.function.evaluate_derivative(args, self.derivative_order)
    return self.function.evaluate(args)

  def evaluate_vector(self, args, variables, n_samples):
    log_debug(f"Evaluating custom function '{self.name}' per sample over {n_samples} points")
    if args:
      stacked = np.column_stack(args)
    else:
      stacked = np.empty((n_samples, 0), dtype=np.float64)
    result = np.empty(n_samples, dtype=np.float64)
    for i in range(n_samples):
      result[i] = self.evaluate(stacked[i], variables)
    return result

  def differentiate(self, children, child_derivs, variable):
    if self.get_num_arguments() == 0:
      return _constant(0.0)
    result = None
    for i, deriv in enumerate(child_derivs):
      term = _node(Multiply(), _node(self.with_derivative(i), *children), deriv)
      result = term if result is None else _node(Add(), result, term)
    return result

  def _key(self):
    return (self.ID, self.name, self.derivative_order, self.function)

  def __repr__(self):
    return f"Custom({self.name!r}, derivative_order={list(self.derivative_order)})"


class Add(Operation):
  __slots__ = ()
  NAME = '+'
  ID = OpId.ADD

  def evaluate(self, args, variables):
    return np.add(args[0], args[1])

  def differentiate(self, children, child_derivs, variable):
    return _node(Add(), child_derivs[0], child_derivs[1])

  def is_infix_operator(self):
    return True

  def is_symmetric(self):
    return True


class Subtract(Operation):
  __slots__ = ()
  NAME = '-'
  ID = OpId.SUBTRACT

  def evaluate(self, args, variables):
    return np.subtract(args[0], args[1])

  def differentiate(self, children, child_derivs, variable):
    return _node(Subtract(), child_derivs[0], child_derivs[1])

  def is_infix_operator(self):
    return True


class Multiply(Operation):
  __slots__ = ()
  NAME = '*'
  ID = OpId.MULTIPLY

  def evaluate(self, args, variables):
    return np.multiply(args[0], args[1])

  def differentiate(self, children, child_derivs, variable):
    return _node(Add(),
                 _node(Multiply(), child_derivs[0], children[1]),
                 _node(Multiply(), children[0], child_derivs[1]))

  def is_infix_operator(self):
    return True

  def is_symmetric(self):
    return True


class Divide(Operation):
  __slots__ = ()
  NAME = '/'
  ID = OpId.DIVIDE

  def evaluate(self, args, variables):
    return np.divide(args[0], args[1])

  def differentiate(self, children, child_derivs, variable):
    return _node(Divide(),
                 _node(Subtract(),
                       _node(Multiply(), child_derivs[0], children[1]),
                       _node(Multiply(), children[0], child_derivs[1])),
                 _node(Square(), children[1]))

  def is_infix_operator(self):
    return True


class Power(Operation):
  __slots__ = ()
  NAME = '^'
  ID = OpId.POWER

  def evaluate(self, args, variables):
    return np.power(args[0], args[1])

  def differentiate(self, children, child_derivs, variable):
    # d(a^b) = b*a^(b-1)*da + log(a)*a^b*db.  A term whose derivative factor
    # is symbolically zero is left out: with a constant exponent the log term
    # would turn into NaN for a <= 0.
    base, exponent = children
    terms = []
    if not _is_zero(child_derivs[0]):
      terms.append(_node(Multiply(),
                         _node(Multiply(), exponent, _node(Power(), base, _node(Decrement(), exponent))),
                         child_derivs[0]))
    if not _is_zero(child_derivs[1]):
      terms.append(_node(Multiply(),
                         _node(Multiply(), _node(Log(), base), _node(Power(), base, exponent)),
                         child_derivs[1]))
    if not terms:
      return _constant(0.0)
    if len(terms) == 1:
      return terms[0]
    return _node(Add(), terms[0], terms[1])

  def is_infix_operator(self):
    return True


class Negate(Operation):
  __slots__ = ()
  NAME = '-'
  ID = OpId.NEGATE

  def evaluate(self, args, variables):
    return np.negative(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(), child_derivs[0])


class Sqrt(Operation):
  __slots__ = ()
  NAME = 'sqrt'
  ID = OpId.SQRT

  def evaluate(self, args, variables):
    return np.sqrt(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Divide(),
                 child_derivs[0],
                 _node(Multiply(), _constant(2.0), _node(Sqrt(), children[0])))


class Exp(Operation):
  __slots__ = ()
  NAME = 'exp'
  ID = OpId.EXP

  def evaluate(self, args, variables):
    return np.exp(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(), _node(Exp(), children[0]), child_derivs[0])


class Log(Operation):
  __slots__ = ()
  NAME = 'log'
  ID = OpId.LOG

  def evaluate(self, args, variables):
    return np.log(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Divide(), child_derivs[0], children[0])


class Sin(Operation):
  __slots__ = ()
  NAME = 'sin'
  ID = OpId.SIN

  def evaluate(self, args, variables):
    return np.sin(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(), _node(Cos(), children[0]), child_derivs[0])


class Cos(Operation):
  __slots__ = ()
  NAME = 'cos'
  ID = OpId.COS

  def evaluate(self, args, variables):
    return np.cos(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(), _node(Multiply(), _node(Sin(), children[0]), child_derivs[0]))


class Sec(Operation):
  __slots__ = ()
  NAME = 'sec'
  ID = OpId.SEC

  def evaluate(self, args, variables):
    return np.divide(1.0, np.cos(args[0]))

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(),
                 _node(Multiply(), _node(Sec(), children[0]), _node(Tan(), children[0])),
                 child_derivs[0])


class Csc(Operation):
  __slots__ = ()
  NAME = 'csc'
  ID = OpId.CSC

  def evaluate(self, args, variables):
    return np.divide(1.0, np.sin(args[0]))

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(),
                 _node(Multiply(),
                       _node(Multiply(), _node(Csc(), children[0]), _node(Cot(), children[0])),
                       child_derivs[0]))


class Tan(Operation):
  __slots__ = ()
  NAME = 'tan'
  ID = OpId.TAN

  def evaluate(self, args, variables):
    return np.tan(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(), _node(Square(), _node(Sec(), children[0])), child_derivs[0])


class Cot(Operation):
  __slots__ = ()
  NAME = 'cot'
  ID = OpId.COT

  def evaluate(self, args, variables):
    return np.divide(1.0, np.tan(args[0]))

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(),
                 _node(Multiply(), _node(Square(), _node(Csc(), children[0])), child_derivs[0]))


class Asin(Operation):
  __slots__ = ()
  NAME = 'asin'
  ID = OpId.ASIN

  def evaluate(self, args, variables):
    return np.arcsin(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Divide(),
                 child_derivs[0],
                 _node(Sqrt(), _node(Subtract(), _constant(1.0), _node(Square(), children[0]))))


class Acos(Operation):
  __slots__ = ()
  NAME = 'acos'
  ID = OpId.ACOS

  def evaluate(self, args, variables):
    return np.arccos(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(),
                 _node(Divide(),
                       child_derivs[0],
                       _node(Sqrt(), _node(Subtract(), _constant(1.0), _node(Square(), children[0])))))


class Atan(Operation):
  __slots__ = ()
  NAME = 'atan'
  ID = OpId.ATAN

  def evaluate(self, args, variables):
    return np.arctan(args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Divide(), child_derivs[0], _node(Increment(), _node(Square(), children[0])))


class Square(Operation):
  __slots__ = ()
  NAME = 'square'
  ID = OpId.SQUARE

  def evaluate(self, args, variables):
    return np.multiply(args[0], args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(), _node(Multiply(), _constant(2.0), children[0]), child_derivs[0])


class Cube(Operation):
  __slots__ = ()
  NAME = 'cube'
  ID = OpId.CUBE

  def evaluate(self, args, variables):
    return np.multiply(np.multiply(args[0], args[0]), args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Multiply(),
                 _node(Multiply(), _constant(3.0), _node(Square(), children[0])),
                 child_derivs[0])


class Reciprocal(Operation):
  __slots__ = ()
  NAME = 'recip'
  ID = OpId.RECIPROCAL

  def evaluate(self, args, variables):
    return np.divide(1.0, args[0])

  def differentiate(self, children, child_derivs, variable):
    return _node(Negate(), _node(Divide(), child_derivs[0], _node(Square(), children[0])))


class Increment(Operation):
  __slots__ = ()
  NAME = 'increment'
  ID = OpId.INCREMENT

  def evaluate(self, args, variables):
    return np.add(args[0], 1.0)

  def differentiate(self, children, child_derivs, variable):
    return child_derivs[0]


class Decrement(Operation):
  __slots__ = ()
  NAME = 'decrement'
  ID = OpId.DECREMENT

  def evaluate(self, args, variables):
    return np.subtract(args[0], 1.0)

  def differentiate(self, children, child_derivs, variable):
    return child_derivs[0]


# Operations with no payload, by discriminant
OPERATION_TYPES: Dict[OpId, Type[Operation]] = {
  cls.ID: cls for cls in (
    Add, Subtract, Multiply, Divide, Power, Negate, Sqrt, Exp, Log,
    Sin, Cos, Sec, Csc, Tan, Cot, Asin, Acos, Atan,
    Square, Cube, Reciprocal, Increment, Decrement
  )
}

ALL_OPERATION_TYPES: Tuple[Type[Operation], ...] = (Constant, Variable, Custom) + tuple(OPERATION_TYPES.values())


def create_operation(name: str, num_arguments: int) -> Operation:
  """
  Look up a builtin operator or function by its display name.

  num_arguments separates the binary operators from the unary functions
  ('-' is Subtract with two arguments and Negate with one).
  """
  if num_arguments == 2:
    op_map = BINARY_OP_MAP
  elif num_arguments == 1:
    op_map = UNARY_OP_MAP
  else:
    op_map = {}
  if name not in op_map:
    raise ValueError(f"Unknown operation '{name}' taking {num_arguments} argument(s)")
  return OPERATION_TYPES[op_map[name]]()
