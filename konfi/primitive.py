"""
Operator semantics, as explicit tables.

Binary operators dispatch on the operator and the pair of operand type-names.
A pair absent from the table is a type error for that operator.
"""
import math, operator
from .syntax import BinOp, UnOp
from .values import type_name, truthy, VALUE
from .faults import OperatorTypeError, UnsupportedOperator, DivisionByZero, IntegerOverflow

INT_MIN = -2**63
INT_MAX = 2**63 - 1

def fits_int64(n:int) -> bool: return INT_MIN <= n <= INT_MAX

def _checked(op:BinOp, fn):
	def checked(a, b):
		result = fn(a, b)
		if not fits_int64(result): raise IntegerOverflow(op.glyph)
		return result
	return checked

def _int_div(a:int, b:int) -> int:
	# Truncates toward zero, as 64-bit machine division does.
	if b == 0: raise DivisionByZero()
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

def _float_div(a:float, b:float) -> float:
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

def _promoted(fn):
	return lambda a, b: fn(float(a), float(b))

ARITHMETIC = {
	BinOp.TIMES: (operator.mul, operator.mul),
	BinOp.DIV: (_int_div, _float_div),
	BinOp.PLUS: (operator.add, operator.add),
	BinOp.MINUS: (operator.sub, operator.sub),
}

COMPARISON = {
	BinOp.LESS_THAN: operator.lt,
	BinOp.GREATER_THAN: operator.gt,
	BinOp.LESS_EQ: operator.le,
	BinOp.GREATER_EQ: operator.ge,
	BinOp.EQ: operator.eq,
	BinOp.NOT_EQ: operator.ne,
}

LOGICAL = {
	BinOp.LOGICAL_AND: lambda a, b: a and b,
	BinOp.LOGICAL_OR: lambda a, b: a or b,
}

UNSUPPORTED = frozenset([BinOp.SHIFT_LEFT, BinOp.SHIFT_RIGHT])

MIXED_NUMERIC = [("int", "double"), ("double", "int"), ("double", "double")]

BINARY : dict[tuple[BinOp, str, str], callable] = {}

for _op, (_int_fn, _float_fn) in ARITHMETIC.items():
	BINARY[_op, "int", "int"] = _checked(_op, _int_fn)
	for _pair in MIXED_NUMERIC:
		BINARY[(_op,)+_pair] = _promoted(_float_fn)

for _op, _fn in COMPARISON.items():
	BINARY[_op, "int", "int"] = _fn
	for _pair in MIXED_NUMERIC:
		BINARY[(_op,)+_pair] = _promoted(_fn)
	BINARY[_op, "str", "str"] = _fn
	BINARY[_op, "bool", "bool"] = _fn

def binary(op:BinOp, lhs:VALUE, rhs:VALUE) -> VALUE:
	""" Both operands arrive already evaluated: nothing here short-circuits. """
	if op in UNSUPPORTED: raise UnsupportedOperator(op.glyph)
	if op in LOGICAL: return LOGICAL[op](truthy(lhs), truthy(rhs))
	kinds = type_name(lhs), type_name(rhs)
	try: fn = BINARY[(op,)+kinds]
	except KeyError: raise OperatorTypeError(op.glyph, *kinds) from None
	return fn(lhs, rhs)

def _negate(value:VALUE) -> VALUE:
	kind = type_name(value)
	if kind == "int":
		if value == INT_MIN: raise IntegerOverflow(UnOp.UNARY_MINUS.glyph)
		return -value
	if kind == "double": return -value
	raise OperatorTypeError(UnOp.UNARY_MINUS.glyph, kind)

UNARY = {
	UnOp.UNARY_PLUS: lambda value: value,
	UnOp.UNARY_MINUS: _negate,
	UnOp.NOT: lambda value: not truthy(value),
}

def unary(op:UnOp, value:VALUE) -> VALUE:
	return UNARY[op](value)
