"""
Recursive-descent parser, working directly on the characters of the source text.

Binary operators come in precedence classes, loosest first in LEVELS.
One method parses every class, parameterized by the loosest class it may
consume. Within a class, operators group to the RIGHT: a - b - c means
a - (b - c).

When no parse succeeds, the error reports the furthest position the parser
reached, along with whatever it was hoping to see there.
"""
from typing import Optional, Union
from boozetools.parsing.interface import ParseError
from .ontology import Nom
from .syntax import (
	BinOp, UnOp, Literal, VarRef, FieldAccess, UnaryExpr, BinaryExpr,
	Field, RecordLiteral, LetBinding, Module, ValueExpression,
)
from .strings import decode_string, StringSyntaxError, WHITESPACE
from .primitive import fits_int64

class KonfiParseError(ParseError):
	def __init__(self, expected:str, offset:int):
		super().__init__(expected, offset)
		self.expected, self.offset = expected, offset
	def __str__(self): return "Expected %s at offset %d" % (self.expected, self.offset)

LEVELS = (
	(BinOp.LOGICAL_OR,),
	(BinOp.LOGICAL_AND,),
	(BinOp.EQ, BinOp.NOT_EQ),
	(BinOp.LESS_EQ, BinOp.GREATER_EQ, BinOp.LESS_THAN, BinOp.GREATER_THAN),
	(BinOp.SHIFT_LEFT, BinOp.SHIFT_RIGHT),
	(BinOp.PLUS, BinOp.MINUS),
	(BinOp.TIMES, BinOp.DIV),
)
TIGHTEST = len(LEVELS) - 1
PRECEDENCE = {op: level for level, ops in enumerate(LEVELS) for op in ops}
LONGEST_FIRST = sorted(PRECEDENCE, key=lambda op: -len(op.glyph))

PREFIX = {op.glyph: op for op in UnOp}
DIGITS = "0123456789"
HORIZONTAL = " \t"

class KonfiParser:
	def __init__(self, text:str):
		self.text = text
		self.pos = 0
		self._furthest = 0
		self._wanted = []

	# Bookkeeping for error messages

	def want(self, what:str, at:Optional[int]=None):
		at = self.pos if at is None else at
		if at > self._furthest:
			self._furthest, self._wanted = at, [what]
		elif at == self._furthest and what not in self._wanted:
			self._wanted.append(what)

	def failure(self) -> KonfiParseError:
		return KonfiParseError(" or ".join(self._wanted) or "something else", self._furthest)

	# Character-level helpers

	def at_end(self) -> bool: return self.pos >= len(self.text)

	def skip_space(self):
		text, pos = self.text, self.pos
		while pos < len(text) and text[pos] in WHITESPACE: pos += 1
		self.pos = pos

	def take(self, glyph:str) -> bool:
		""" Consume glyph if it comes next. Silent on failure: use for optional things. """
		if self.text.startswith(glyph, self.pos):
			self.pos += len(glyph)
			return True
		return False

	def expect(self, glyph:str) -> bool:
		if self.take(glyph): return True
		self.want(repr(glyph))
		return False

	def line_break(self) -> bool:
		while self.pos < len(self.text) and self.text[self.pos] in HORIZONTAL: self.pos += 1
		if self.take("\n") or self.take("\r\n"): return True
		self.want("a line break")
		return False

	def identifier(self) -> Optional[Nom]:
		text, start = self.text, self.pos
		if start >= len(text) or not (text[start].isalpha() or text[start] == '_'):
			self.want("a name")
			return None
		end = start + 1
		while end < len(text) and (text[end].isalnum() or text[end] == '_'): end += 1
		self.pos = end
		return Nom(text[start:end], start)

	# The grammar proper

	def module(self) -> Optional[Module]:
		self.skip_space()
		let_bindings = []
		while True:
			mark = self.pos
			self.skip_space()
			binding = self.let_binding()
			if binding is None or not self.line_break():
				self.pos = mark
				break
			let_bindings.append(binding)
		self.skip_space()
		expr = self.expr()
		if expr is None: return None
		self.skip_space()
		if not self.at_end():
			self.want("the end of the text")
			return None
		return Module(let_bindings, expr)

	def let_binding(self) -> Optional[LetBinding]:
		start = self.pos
		if not self.expect("let"): return None
		if self.at_end() or self.text[self.pos] not in WHITESPACE:
			self.want("a space after 'let'")
			return None
		self.skip_space()
		nom = self.identifier()
		if nom is None: return None
		self.skip_space()
		if not self.expect("="): return None
		self.skip_space()
		expr = self.expr()
		if expr is None: return None
		return LetBinding(nom, expr, start)

	def expr(self, level:int=0) -> Optional[ValueExpression]:
		"""
		Parse an expression using only operators of class `level` or tighter.
		A run of same-class operators is collected in a loop and folded from the
		right, so long chains cost no Python stack. Each right-hand operand
		recurses only for the tighter classes, which keeps nesting cheap.
		"""
		start = self.pos
		tree = self.atom()
		if tree is None: return None
		while True:
			mark = self.pos
			op = self.operator(level, TIGHTEST)
			if op is None:
				self.pos = mark
				return tree
			klass = PRECEDENCE[op]
			operands, operators = [tree], []
			while op is not None:
				self.skip_space()
				rhs = self.expr(klass + 1)
				if rhs is None:
					self.pos = start
					return None
				operators.append(op)
				operands.append(rhs)
				mark = self.pos
				op = self.operator(klass, klass)
				if op is None: self.pos = mark
			tree = operands.pop()
			while operators:
				tree = BinaryExpr(operands.pop(), operators.pop(), tree)

	def operator(self, lo:int, hi:int) -> Optional[BinOp]:
		""" Skip space, then take the longest operator glyph if its class is in range. """
		self.skip_space()
		for op in LONGEST_FIRST:
			if self.text.startswith(op.glyph, self.pos):
				if not lo <= PRECEDENCE[op] <= hi: return None
				self.pos += len(op.glyph)
				return op
		return None

	def atom(self) -> Optional[ValueExpression]:
		start = self.pos
		before = self._furthest, list(self._wanted)
		for alternative in (self.record, self.parenthesized, self.string, self.integer, self.prefixed, self.variable):
			node = alternative()
			if node is not None: return self.suffixes(node)
			self.pos = start
		if self._furthest <= start:
			# Nothing got past the first character: replace the guesses with one summary.
			self._furthest, self._wanted = before
			self.want("an expression", start)
		return None

	def suffixes(self, node:ValueExpression) -> ValueExpression:
		while True:
			mark = self.pos
			self.skip_space()
			if not self.take("."):
				self.pos = mark
				return node
			self.skip_space()
			nom = self.identifier()
			if nom is None:
				self.pos = mark
				return node
			node = FieldAccess(node, nom)

	def record(self) -> Optional[RecordLiteral]:
		start = self.pos
		if not self.expect("{"): return None
		self.skip_space()
		fields = []
		field = self.field()
		if field is not None:
			fields.append(field)
			while True:
				mark = self.pos
				if not self.line_break():
					self.pos = mark
					break
				self.skip_space()
				field = self.field()
				if field is None:
					self.pos = mark
					break
				fields.append(field)
		self.skip_space()
		if not self.expect("}"): return None
		return RecordLiteral(fields, start, self.pos)

	def field(self) -> Optional[Field]:
		start = self.pos
		nom = self.identifier()
		if nom is not None:
			self.skip_space()
			if self.expect(":"):
				self.skip_space()
				expr = self.expr()
				if expr is not None: return Field(nom, expr)
		self.pos = start
		return None

	def parenthesized(self) -> Optional[ValueExpression]:
		if not self.expect("("): return None
		self.skip_space()
		inner = self.expr()
		# Past an open-paren, nothing else could make sense.
		if inner is None: raise self.failure()
		self.skip_space()
		if not self.expect(")"): raise self.failure()
		return inner

	def string(self) -> Optional[Literal]:
		start = self.pos
		if not self.expect('"'): return None
		try: content, end = decode_string(self.text, start)
		except StringSyntaxError as ex:
			raise KonfiParseError(ex.problem, ex.offset) from None
		self.pos = end
		return Literal(content, start, end)

	def integer(self) -> Optional[Literal]:
		text, start = self.text, self.pos
		pos = start
		if pos < len(text) and text[pos] in "+-": pos += 1
		digits_start = pos
		while pos < len(text) and text[pos] in DIGITS:
			pos += 1
			while pos < len(text) and text[pos] == '_': pos += 1
		if pos == digits_start or text[digits_start] not in DIGITS:
			self.want("a number", start)
			return None
		value = int(text[start:pos].replace('_', ''))
		if not fits_int64(value):
			raise KonfiParseError("a number that fits in 64 bits", start)
		self.pos = pos
		return Literal(value, start, pos)

	def prefixed(self) -> Optional[UnaryExpr]:
		spot = self.pos
		op = PREFIX.get(self.text[spot:spot+1])
		if op is None: return None
		self.pos += 1
		self.skip_space()
		arg = self.atom()
		if arg is None: return None
		return UnaryExpr(op, spot, arg)

	def variable(self) -> Optional[VarRef]:
		nom = self.identifier()
		return None if nom is None else VarRef(nom)

def _too_deep(parser:KonfiParser) -> KonfiParseError:
	return KonfiParseError("a less deeply nested expression", parser.pos)

def parse_module(text:str) -> Module:
	""" The whole text must be some let-bindings and then exactly one expression. """
	parser = KonfiParser(text)
	try: module = parser.module()
	except RecursionError: raise _too_deep(parser) from None
	if module is None: raise parser.failure()
	return module

def parse_expr(text:str) -> ValueExpression:
	""" The whole text must be exactly one expression, perhaps with whitespace around it. """
	parser = KonfiParser(text)
	parser.skip_space()
	try: expr = parser.expr()
	except RecursionError: raise _too_deep(parser) from None
	if expr is not None:
		parser.skip_space()
		if parser.at_end(): return expr
		parser.want("the end of the text")
	raise parser.failure()

def parse_text(document:"Document", report:"Report") -> Union[Module, None]:
	""" Submit text to parser; route any complaint to the report. """
	report.info("Parsing", document.path or "<text>")
	try:
		return parse_module(document.text)
	except KonfiParseError as ex:
		report.parse_error(document, ex)
		return None
