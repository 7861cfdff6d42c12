import unittest

from konfi import syntax
from konfi.front_end import parse_expr, parse_module, KonfiParseError
from konfi.syntax import BinOp, UnOp
from konfi.unparse import unparse

def _shape(text):
	return unparse(parse_expr(text))

class PrecedenceTests(unittest.TestCase):

	def test_same_class_groups_to_the_right(self):
		self.assertEqual("3 - (8 - 1)", _shape("3-8-1"))
		self.assertEqual("a / (b / c)", _shape("a/b/c"))
		self.assertEqual("a + (b - c)", _shape("a + b - c"))
		self.assertEqual("a || (b || c)", _shape("a || b || c"))

	def test_tighter_classes_bind_first(self):
		self.assertEqual("1 + (2 * 3)", _shape("1 + 2 * 3"))
		self.assertEqual("(1 * 2) + 3", _shape("1 * 2 + 3"))
		self.assertEqual("(a < b) == (c > d)", _shape("a < b == c > d"))
		self.assertEqual("(a == b) && (c != d)", _shape("a == b && c != d"))
		self.assertEqual("(a && b) || c", _shape("a && b || c"))
		self.assertEqual("(a << b) <= (c >> d)", _shape("a << b <= c >> d"))

	def test_every_operator_glyph(self):
		for op in BinOp:
			with self.subTest(op.name):
				tree = parse_expr("x %s y" % op.glyph)
				self.assertIsInstance(tree, syntax.BinaryExpr)
				self.assertIs(op, tree.op)

	def test_longer_glyphs_win(self):
		self.assertIs(BinOp.LESS_EQ, parse_expr("a<=b").op)
		self.assertIs(BinOp.SHIFT_LEFT, parse_expr("a<<b").op)
		self.assertIs(BinOp.NOT_EQ, parse_expr("a!=b").op)

	def test_parentheses_override(self):
		self.assertEqual("(3 - 8) - 1", _shape("(3-8)-1"))
		self.assertEqual("a * (b + c)", _shape("a * ( b + c )"))

	def test_whitespace_and_newlines_around_operators(self):
		self.assertEqual("1 + 2", _shape("1\n+\n  2"))
		self.assertEqual("a.b", _shape("a . b"))

	def test_long_chain(self):
		tree = parse_expr(" + ".join(["1"] * 5000))
		count = 1
		while isinstance(tree, syntax.BinaryExpr):
			self.assertIsInstance(tree.lhs, syntax.Literal)
			tree = tree.rhs
			count += 1
		self.assertEqual(5000, count)

class AtomTests(unittest.TestCase):

	def test_integers(self):
		for text, value in [("0", 0), ("42", 42), ("-17", -17), ("+5", 5), ("1_000_000", 1000000), ("9223372036854775807", 2**63-1), ("-9223372036854775808", -2**63)]:
			with self.subTest(text):
				tree = parse_expr(text)
				self.assertIsInstance(tree, syntax.Literal)
				self.assertEqual(value, tree.value)

	def test_integer_too_big(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("x + 9223372036854775808")
		self.assertEqual(4, cm.exception.offset)

	def test_string(self):
		tree = parse_expr(r'"a\tb"')
		self.assertIsInstance(tree, syntax.Literal)
		self.assertEqual("a\tb", tree.value)
		self.assertEqual(slice(0, 6), tree.span())

	def test_bad_string_points_at_the_escape(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr(r'{a: "ok\z"}')
		self.assertEqual(7, cm.exception.offset)

	def test_prefix_operators(self):
		tree = parse_expr("!!x")
		self.assertIsInstance(tree, syntax.UnaryExpr)
		self.assertIs(UnOp.NOT, tree.op)
		self.assertIs(UnOp.NOT, tree.arg.op)
		self.assertEqual("x", tree.arg.arg.name)
		tree = parse_expr("- a")
		self.assertIs(UnOp.UNARY_MINUS, tree.op)
		self.assertEqual(slice(0, 3), tree.span())

	def test_prefix_binds_tighter_than_binary(self):
		self.assertEqual("-a * b", _shape("-a*b"))
		self.assertEqual("!a && b", _shape("!a && b"))

	def test_field_access_chain(self):
		tree = parse_expr("a.b.c")
		self.assertIsInstance(tree, syntax.FieldAccess)
		self.assertEqual("c", tree.name)
		self.assertEqual("b", tree.base.name)
		self.assertEqual("a", tree.base.base.name)
		self.assertEqual("{\n\tx: 1\n}.x", _shape("{x: 1}.x"))
		self.assertEqual("(a + b).c", _shape("(a+b).c"))

	def test_identifiers(self):
		for name in ["x", "_", "snake_case", "camelCase2", "_9"]:
			with self.subTest(name):
				self.assertEqual(name, parse_expr(name).name)

class RecordTests(unittest.TestCase):

	def test_empty(self):
		for text in ["{}", "{ }", "{\n\n}"]:
			with self.subTest(text):
				tree = parse_expr(text)
				self.assertIsInstance(tree, syntax.RecordLiteral)
				self.assertEqual([], tree.field_names())

	def test_fields_one_per_line(self):
		tree = parse_expr("{\n  a: 1\n  b : 2 + 3\r\n\n  c:{d: 4}\n}")
		self.assertEqual(["a", "b", "c"], tree.field_names())
		self.assertIsInstance(tree.field("c").expr, syntax.RecordLiteral)
		self.assertIsNone(tree.field("d"))

	def test_single_line(self):
		self.assertEqual(["a"], parse_expr("{a:1}").field_names())

	def test_first_definition_wins_lookup(self):
		tree = parse_expr("{a: 1\na: 2}")
		self.assertEqual(["a", "a"], tree.field_names())
		self.assertEqual(1, tree.field("a").expr.value)

	def test_commas_are_not_separators(self):
		with self.assertRaises(KonfiParseError):
			parse_expr("{a: 1, b: 2}")

	def test_two_fields_on_one_line(self):
		with self.assertRaises(KonfiParseError):
			parse_expr("{a: 1 b: 2}")

class ModuleTests(unittest.TestCase):

	def test_bare_expression(self):
		module = parse_module("  \n{a: 1}\n\n")
		self.assertEqual((), module.let_bindings)
		self.assertIsInstance(module.expr, syntax.RecordLiteral)

	def test_let_bindings_are_kept(self):
		module = parse_module("let x = 1\nlet y = x + 2\n{a: 1}\n")
		self.assertEqual(["x", "y"], [b.nom.text for b in module.let_bindings])
		self.assertIsInstance(module.let_bindings[1].expr, syntax.BinaryExpr)
		self.assertIsInstance(module.expr, syntax.RecordLiteral)

	def test_a_variable_named_like_a_keyword(self):
		module = parse_module("letter")
		self.assertEqual("letter", module.expr.name)

	def test_exactly_one_expression(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_module("{a: 1}\n{b: 2}")
		self.assertEqual(7, cm.exception.offset)

class ErrorTests(unittest.TestCase):

	def test_empty_text(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_module("")
		self.assertEqual(0, cm.exception.offset)
		self.assertIn("an expression", cm.exception.expected)

	def test_missing_operand(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("{a: 1 +}")
		self.assertEqual(7, cm.exception.offset)
		self.assertIn("an expression", str(cm.exception))

	def test_unclosed_parenthesis(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("(1 + 2")
		self.assertEqual(6, cm.exception.offset)
		self.assertIn("')'", cm.exception.expected)

	def test_empty_parenthesis(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("1 + ()")
		self.assertEqual(5, cm.exception.offset)

	def test_unclosed_record(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("{a: 1\nb: 2")
		self.assertEqual(10, cm.exception.offset)

	def test_moderate_nesting(self):
		tree = parse_expr("(" * 100 + "1 + 2" + ")" * 100)
		self.assertIsInstance(tree, syntax.BinaryExpr)
		tree = parse_expr("{a: " * 100 + "1" + "}" * 100)
		for _ in range(99): tree = tree.field("a").expr
		self.assertEqual(1, tree.field("a").expr.value)
		tree = parse_expr("-(" * 100 + "x" + ")" * 100)
		self.assertIsInstance(tree, syntax.UnaryExpr)

	def test_nesting_too_deep(self):
		for text in ["(" * 5000 + "1" + ")" * 5000, "{a: " * 5000 + "1" + "}" * 5000]:
			with self.subTest(text[:6]):
				with self.assertRaises(KonfiParseError) as cm:
					parse_module(text)
				self.assertEqual("a less deeply nested expression", cm.exception.expected)
		with self.assertRaises(KonfiParseError):
			parse_expr("(" * 5000 + "1" + ")" * 5000)

	def test_trailing_junk(self):
		with self.assertRaises(KonfiParseError) as cm:
			parse_expr("1 + 2 )")
		self.assertEqual(6, cm.exception.offset)

if __name__ == '__main__':
	unittest.main()
