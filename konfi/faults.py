"""
Everything that can go wrong while evaluating a Konfi program.

Evaluation is fail-fast: the first of these aborts the whole run.
The evaluator fills in `site` with the innermost expression under
evaluation when the fault arose, so diagnostics can underline it.
"""
from typing import Optional
from .ontology import Phrase

class EvalError(Exception):
	site: Optional[Phrase] = None

	def describe(self) -> str:
		raise NotImplementedError(type(self))

	def __str__(self): return self.describe()

class UnboundVariable(EvalError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Unbound variable '%s'" % self.name

class FieldNotFound(EvalError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Field does not exist '%s'" % self.name

class InvalidFieldAccessTarget(EvalError):
	def __init__(self, actual_type:str):
		super().__init__(actual_type)
		self.actual_type = actual_type
	def describe(self): return "Invalid field access on value type '%s'" % self.actual_type

class OperatorTypeError(EvalError):
	""" The operand types do not suit the operator. Unary operators leave right_type as None. """
	def __init__(self, operator:str, left_type:str, right_type:Optional[str]=None):
		super().__init__(operator, left_type, right_type)
		self.operator, self.left_type, self.right_type = operator, left_type, right_type
	def describe(self):
		if self.right_type is None:
			return "Cannot apply unary '%s' to type '%s'" % (self.operator, self.left_type)
		pattern = "Invalid types for operation '%s': %s and %s"
		return pattern % (self.operator, self.left_type, self.right_type)

class UnsupportedOperator(EvalError):
	def __init__(self, operator:str):
		super().__init__(operator)
		self.operator = operator
	def describe(self): return "Operator '%s' is not supported" % self.operator

class NotSupported(EvalError):
	def __init__(self, construct:str):
		super().__init__(construct)
		self.construct = construct
	def describe(self): return "Evaluating %s is not supported" % self.construct

class DivisionByZero(EvalError):
	def describe(self): return "Integer division by zero"

class IntegerOverflow(EvalError):
	def __init__(self, operator:str):
		super().__init__(operator)
		self.operator = operator
	def describe(self): return "Result of '%s' does not fit in a 64-bit integer" % self.operator

class CircularReference(EvalError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Field '%s' depends on its own value" % self.name

class NestingTooDeep(EvalError):
	def describe(self): return "Expressions are nested too deeply to evaluate"
