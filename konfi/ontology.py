"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Every phrase knows the half-open range of source
characters it came from, so diagnostics can point at it.
"""

class Phrase:
	def left(self) -> int:
		""" Return the offset of the first character of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the offset just past the last character of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> slice: return slice(self.left(), self.right())

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	spot: int
	def __init__(self, text, spot):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def left(self): return self.spot
	def right(self): return self.spot + len(self.text)

class ValueExpression(Phrase): pass
