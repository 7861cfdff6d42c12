"""
Turn a syntax tree back into Konfi source text.

The output parses back to an equivalent tree. It is not a pretty-printer for
hand-written text: every binary operand that is itself a binary expression
gets parentheses, whatever the precedence would have done.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .strings import encode_string

class Unparser(Visitor):
	def __init__(self, indent:str="\t"):
		self._indent = indent

	def render(self, expr:syntax.ValueExpression, depth:int=0) -> str:
		return self.visit(expr, depth)

	def operand(self, expr:syntax.ValueExpression, depth:int) -> str:
		text = self.visit(expr, depth)
		if isinstance(expr, syntax.BinaryExpr): return "(%s)" % text
		return text

	@staticmethod
	def visit_Literal(expr:syntax.Literal, depth:int):
		value = expr.value
		if isinstance(value, str): return encode_string(value)
		if type(value) is int: return str(value)
		raise ValueError("Konfi source has no way to write %r" % (value,))

	@staticmethod
	def visit_VarRef(expr:syntax.VarRef, depth:int):
		return expr.name

	def visit_FieldAccess(self, expr:syntax.FieldAccess, depth:int):
		base = self.visit(expr.base, depth)
		if isinstance(expr.base, (syntax.BinaryExpr, syntax.UnaryExpr)): base = "(%s)" % base
		return "%s.%s" % (base, expr.name)

	def visit_UnaryExpr(self, expr:syntax.UnaryExpr, depth:int):
		return expr.op.glyph + self.operand(expr.arg, depth)

	def visit_BinaryExpr(self, expr:syntax.BinaryExpr, depth:int):
		lhs = self.operand(expr.lhs, depth)
		rhs = self.operand(expr.rhs, depth)
		return "%s %s %s" % (lhs, expr.op.glyph, rhs)

	def visit_RecordLiteral(self, expr:syntax.RecordLiteral, depth:int):
		if not expr.fields: return "{}"
		inside = self._indent * (depth + 1)
		lines = ["{"]
		for field in expr.fields:
			lines.append("%s%s: %s" % (inside, field.name, self.visit(field.expr, depth + 1)))
		lines.append(self._indent * depth + "}")
		return "\n".join(lines)

	@staticmethod
	def visit_Call(expr:syntax.Call, depth:int):
		raise ValueError("Konfi source has no syntax for function calls")

	@staticmethod
	def visit_FunctionLiteral(expr:syntax.FunctionLiteral, depth:int):
		raise ValueError("Konfi source has no syntax for function literals")

def unparse(expr:syntax.ValueExpression) -> str:
	return Unparser().render(expr)

def unparse_module(module:syntax.Module) -> str:
	unparser = Unparser()
	lines = ["let %s = %s" % (b.nom.text, unparser.render(b.expr)) for b in module.let_bindings]
	lines.append(unparser.render(module.expr))
	return "\n".join(lines) + "\n"
