"""
The set of parse-nodes in simple form.
The parser calls these constructors bottom-up as it recognizes each phrase.
Once built, the tree is never modified: the evaluator only reads it.
"""
from enum import Enum
from typing import Any, Optional, Sequence
from .ontology import Phrase, Nom, ValueExpression


class UnOp(Enum):
	UNARY_PLUS = "+"
	UNARY_MINUS = "-"
	NOT = "!"

	@property
	def glyph(self) -> str: return self.value

class BinOp(Enum):
	TIMES = "*"
	DIV = "/"
	PLUS = "+"
	MINUS = "-"
	SHIFT_LEFT = "<<"
	SHIFT_RIGHT = ">>"
	LESS_THAN = "<"
	GREATER_THAN = ">"
	LESS_EQ = "<="
	GREATER_EQ = ">="
	EQ = "=="
	NOT_EQ = "!="
	LOGICAL_AND = "&&"
	LOGICAL_OR = "||"

	@property
	def glyph(self) -> str: return self.value

class Literal(ValueExpression):
	""" Nil, a 64-bit integer, a double, or a string, as the Python value that plays it. """
	def __init__(self, value: Any, first: int, last: int):
		assert value is None or type(value) in (int, float, str), type(value)
		self.value, self._first, self._last = value, first, last

	def __str__(self): return "<Literal %r>" % self.value
	def left(self): return self._first
	def right(self): return self._last

class VarRef(ValueExpression):
	def __init__(self, nom: Nom): self.nom = nom
	def __str__(self): return self.nom.text
	@property
	def name(self) -> str: return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class FieldAccess(ValueExpression):
	def __init__(self, base: ValueExpression, field_name: Nom):
		self.base, self.field_name = base, field_name
	def __str__(self): return "(%s.%s)" % (self.base, self.field_name.text)
	@property
	def name(self) -> str: return self.field_name.text
	def left(self): return self.base.left()
	def right(self): return self.field_name.right()

class UnaryExpr(ValueExpression):
	def __init__(self, op: UnOp, spot: int, arg: ValueExpression):
		self.op, self._spot, self.arg = op, spot, arg
	def __str__(self): return "(%s%s)" % (self.op.glyph, self.arg)
	def left(self): return self._spot
	def right(self): return self.arg.right()

class BinaryExpr(ValueExpression):
	def __init__(self, lhs: ValueExpression, op: BinOp, rhs: ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op.glyph, self.rhs)
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class LetBinding(Phrase):
	""" Parsed, and kept in the tree, but nothing evaluates these (yet). """
	def __init__(self, nom: Nom, expr: ValueExpression, spot: int):
		self.nom, self.expr, self._spot = nom, expr, spot
	def __repr__(self): return "<let %s>" % self.nom.text
	def left(self): return self._spot
	def right(self): return self.expr.right()

class Field(Phrase):
	def __init__(self, nom: Nom, expr: ValueExpression):
		self.nom, self.expr = nom, expr
	def __repr__(self): return "<field %s>" % self.nom.text
	@property
	def name(self) -> str: return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.expr.right()

class RecordLiteral(ValueExpression):
	"""
	Fields keep their declaration order, which is the order the evaluator
	visits them. Lookup by name finds the first field with that name.
	"""
	let_bindings: Sequence[LetBinding]
	fields: Sequence[Field]

	def __init__(self, fields: Sequence[Field], first: int, last: int, let_bindings: Sequence[LetBinding] = ()):
		self.let_bindings = tuple(let_bindings)
		self.fields = tuple(fields)
		self._first, self._last = first, last
		self._index = {}
		for f in self.fields:
			self._index.setdefault(f.nom.key(), f)

	def __str__(self): return "{%s}" % ", ".join("%s: %s" % (f.nom.text, f.expr) for f in self.fields)

	def field(self, name: str) -> Optional[Field]:
		return self._index.get(name)

	def field_names(self):
		return [f.nom.text for f in self.fields]

	def left(self): return self._first
	def right(self): return self._last

def synthetic_record() -> RecordLiteral:
	""" The stand-in definition for the global context, which defines nothing. """
	return RecordLiteral((), 0, 0)

class Call(ValueExpression):
	""" Part of the data model; the grammar does not produce these yet. """
	def __init__(self, fn_exp: ValueExpression, args: Sequence[ValueExpression]):
		self.fn_exp, self.args = fn_exp, tuple(args)

	def __str__(self):
		return "%s(%s)" % (self.fn_exp, ', '.join(map(str, self.args)))

	def left(self): return self.fn_exp.left()
	def right(self): return (self.args[-1] if self.args else self.fn_exp).right()

class FunctionLiteral(ValueExpression):
	""" Part of the data model; the grammar does not produce these yet. """
	def __init__(self, params: Sequence[Nom], body: ValueExpression, spot: int):
		self.params, self.body, self._spot = tuple(params), body, spot
	def __str__(self): return "(%s) -> %s" % (", ".join(p.text for p in self.params), self.body)
	def left(self): return self._spot
	def right(self): return self.body.right()

class Module:
	let_bindings: Sequence[LetBinding]
	expr: ValueExpression

	def __init__(self, let_bindings: Sequence[LetBinding], expr: ValueExpression):
		self.let_bindings = tuple(let_bindings)
		self.expr = expr
