"""
Lazy Record Fields with Direct Interpretation

A tree-walker. The one interesting part is how variables resolve:
a reference names a field of some enclosing record literal, and
that field gets evaluated on first demand, in the context where
it was defined, and remembered thereafter. Authors can therefore
refer to fields declared later, or in enclosing records, freely.
"""
from . import syntax, primitive
from .faults import (
	EvalError, UnboundVariable, FieldNotFound, InvalidFieldAccessTarget,
	NotSupported, CircularReference, NestingTooDeep,
)
from .front_end import parse_module
from .stacking import Context, ABSENT
from .values import Record, type_name, VALUE

def _eval_literal(expr:syntax.Literal, context:Context):
	return expr.value

def _eval_var_ref(expr:syntax.VarRef, context:Context):
	return lookup(expr.name, context)

def _eval_field_access(expr:syntax.FieldAccess, context:Context):
	base = evaluate(expr.base, context)
	if not isinstance(base, Record):
		raise InvalidFieldAccessTarget(type_name(base))
	if expr.name not in base:
		raise FieldNotFound(expr.name)
	return base.get(expr.name)

def _eval_unary_expr(expr:syntax.UnaryExpr, context:Context):
	return primitive.unary(expr.op, evaluate(expr.arg, context))

def _eval_binary_expr(expr:syntax.BinaryExpr, context:Context):
	lhs = evaluate(expr.lhs, context)
	rhs = evaluate(expr.rhs, context)
	return primitive.binary(expr.op, lhs, rhs)

def _eval_record_literal(expr:syntax.RecordLiteral, context:Context):
	inner = context.child(expr)
	record = inner.record
	for field in expr.fields:
		if field.name in record:
			# Already filled in while evaluating some earlier field.
			continue
		_fill_field(field, inner)
	return record

def _eval_call(expr:syntax.Call, context:Context):
	raise NotSupported("a function call")

def _eval_function_literal(expr:syntax.FunctionLiteral, context:Context):
	raise NotSupported("a function literal")

def _fill_field(field:syntax.Field, owner:Context) -> VALUE:
	""" Evaluate a field where it was defined, and remember the result there. """
	name = field.name
	if name in owner.pending:
		raise CircularReference(name)
	owner.pending.add(name)
	try:
		value = evaluate(field.expr, owner)
	finally:
		owner.pending.discard(name)
	owner.record.set(name, value)
	return value

def lookup(name:str, context:Context) -> VALUE:
	value = context.recall(name)
	if value is not ABSENT:
		return value
	found = context.definer(name)
	if found is None:
		raise UnboundVariable(name)
	owner, field = found
	return _fill_field(field, owner)

def evaluate(expr:syntax.ValueExpression, context:Context) -> VALUE:
	assert isinstance(context, Context), type(context)
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	try: return fn(expr, context)
	except EvalError as ex:
		if ex.site is None: ex.site = expr
		raise

def evaluate_module(module:syntax.Module) -> VALUE:
	""" Each module gets a brand-new global context. The let-bindings are not consulted. """
	try:
		return evaluate(module.expr, Context.global_context())
	except RecursionError:
		ex = NestingTooDeep()
		ex.site = module.expr
		raise ex from None

def evaluate_text(text:str) -> VALUE:
	return evaluate_module(parse_module(text))

EVALUATE = {}
for _k, _v in list(globals().items()):
	if _k.startswith("_eval_"):
		_t = _v.__annotations__["expr"]
		assert isinstance(_t, type), (_k, _t)
		EVALUATE[_t] = _v
