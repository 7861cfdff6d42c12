"""
Evaluation contexts: the run-time counterpart to nested record literals.

Each context pairs a record-in-progress with the record literal that defines it,
and links to the context of the enclosing literal. The records themselves live in
an arena belonging to one evaluation; contexts refer to them by index.
"""
from typing import Iterator, Optional
from .syntax import RecordLiteral, Field, synthetic_record
from .values import Record, VALUE

ABSENT = object()

class RecordArena:
	""" Owns every record made during one evaluation. Indices stay put. """
	def __init__(self):
		self._records: list[Record] = []

	def allocate(self) -> int:
		self._records.append(Record())
		return len(self._records) - 1

	def __getitem__(self, index:int) -> Record: return self._records[index]

class Context:
	arena: RecordArena
	slot: int
	rec_expr: RecordLiteral
	parent: Optional["Context"]
	pending: set[str]  # Fields of this record whose evaluation has begun but not finished.

	def __init__(self, arena:RecordArena, rec_expr:RecordLiteral, parent:Optional["Context"]):
		self.arena = arena
		self.slot = arena.allocate()
		self.rec_expr = rec_expr
		self.parent = parent
		self.pending = set()

	@staticmethod
	def global_context() -> "Context":
		""" A fresh root, with its own arena: nothing carries over between evaluations. """
		return Context(RecordArena(), synthetic_record(), None)

	def child(self, rec_expr:RecordLiteral) -> "Context":
		return Context(self.arena, rec_expr, self)

	@property
	def record(self) -> Record: return self.arena[self.slot]

	def chain(self) -> Iterator["Context"]:
		ctx = self
		while ctx is not None:
			yield ctx
			ctx = ctx.parent

	def recall(self, name:str) -> VALUE:
		""" The innermost already-evaluated value for name, or ABSENT. """
		for ctx in self.chain():
			record = ctx.record
			if name in record: return record.get(name)
		return ABSENT

	def definer(self, name:str) -> Optional[tuple["Context", Field]]:
		""" The innermost context whose literal defines name, with that definition. """
		for ctx in self.chain():
			field = ctx.rec_expr.field(name)
			if field is not None: return ctx, field
		return None

