"""
Konfi values written out as JSON. Records become objects with their
fields in the order the evaluator filled them in.
"""
import json, math
from .values import to_native, VALUE

class SerializationError(ValueError):
	pass

def _finite(value):
	if isinstance(value, float) and not math.isfinite(value):
		raise SerializationError("JSON has no way to write %r" % value)
	return value

def to_json(value:VALUE):
	""" Plain data the json module accepts. """
	return to_native(value, _finite)

def dumps(value:VALUE, pretty:bool=True) -> str:
	data = to_json(value)
	if pretty: return json.dumps(data, ensure_ascii=False, indent=2)
	return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
