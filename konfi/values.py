"""
This module defines the run-time values the evaluator produces.
Basic primitive values play themselves:

	nil -> None, bool -> bool, int -> int, double -> float, str -> str

Records need more help: they fill in one field at a time while the
evaluator works, and every holder of a record sees the same object.
"""
from typing import Iterator, Union

class Record:
	""" A mapping from field name to value which only ever grows. """
	def __init__(self):
		self._fields = {}

	def get(self, name:str) -> "VALUE":
		""" The value of a field, or None if absent. Use `in` to tell absence from nil. """
		return self._fields.get(name)

	def set(self, name:str, value:"VALUE"):
		self._fields[name] = value

	def is_empty(self) -> bool: return not self._fields
	def items(self): return self._fields.items()
	def __contains__(self, name:str) -> bool: return name in self._fields
	def __len__(self) -> int: return len(self._fields)
	def __iter__(self) -> Iterator[str]: return iter(self._fields)

	def __eq__(self, other):
		if isinstance(other, Record): return self._fields == other._fields
		return NotImplemented

	__hash__ = None

	def __repr__(self):
		return "Record(%s)" % ", ".join("%s=%r" % pair for pair in self._fields.items())

VALUE = Union[None, bool, int, float, str, Record]

def type_name(value:VALUE) -> str:
	# bool before int, because Python considers True an int.
	if value is None: return "nil"
	if isinstance(value, bool): return "bool"
	if isinstance(value, int): return "int"
	if isinstance(value, float): return "double"
	if isinstance(value, str): return "str"
	if isinstance(value, Record): return "rec"
	raise TypeError("Not a Konfi value: %r" % (value,))

def truthy(value:VALUE) -> bool:
	kind = type_name(value)
	if kind == "nil": return False
	if kind == "rec": return not value.is_empty()
	return bool(value)

def to_native(value:VALUE, leaf=None):
	"""
	Plain Python data: records become dictionaries, recursively.
	If given, leaf(value) stands in for each non-record value.
	"""
	if type_name(value) == "rec":
		return {name: to_native(item, leaf) for name, item in value.items()}
	return value if leaf is None else leaf(value)
