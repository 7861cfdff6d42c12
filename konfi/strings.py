"""
Quoted string literals: the decoder the parser calls upon, and the
matching encoder the unparser uses.

Inside the quotes, a backslash introduces one of:
	\\n \\r \\t \\b \\f \\\\ \\' \\/ \\"   the usual single-character escapes,
	\\u{H..H}                  a code point in one to six hex digits,
	\\ then whitespace         nothing at all: the backslash and the whole
	                          run of whitespace (line breaks included) vanish.
"""
import re

WHITESPACE = " \t\r\n"

ESCAPES = {
	'n': '\n',
	'r': '\r',
	't': '\t',
	'b': '\b',
	'f': '\f',
	'\\': '\\',
	"'": "'",
	'/': '/',
	'"': '"',
}

_UNICODE = re.compile(r'u\{([0-9A-Fa-f]{1,6})\}')
_PLAIN = re.compile(r'[^"\\]+')

class StringSyntaxError(ValueError):
	def __init__(self, offset:int, problem:str):
		super().__init__(offset, problem)
		self.offset, self.problem = offset, problem
	def __str__(self): return self.problem

def decode_string(text:str, start:int) -> tuple[str, int]:
	"""
	Decode the literal whose opening quote sits at text[start].
	Returns the content and the offset just past the closing quote.
	"""
	assert text[start] == '"', text[start:start+10]
	pieces = []
	index = start + 1
	while True:
		if index >= len(text):
			raise StringSyntaxError(start, "a closing quote for this string")
		c = text[index]
		if c == '"':
			return ''.join(pieces), index + 1
		if c != '\\':
			plain = _PLAIN.match(text, index)
			pieces.append(plain.group())
			index = plain.end()
			continue
		index += 1
		if index >= len(text):
			raise StringSyntaxError(start, "a closing quote for this string")
		c = text[index]
		if c in ESCAPES:
			pieces.append(ESCAPES[c])
			index += 1
		elif c in WHITESPACE:
			while index < len(text) and text[index] in WHITESPACE: index += 1
		elif c == 'u':
			index = _decode_unicode(text, index, pieces)
		else:
			raise StringSyntaxError(index - 1, "a valid escape sequence")

def _decode_unicode(text:str, index:int, pieces:list) -> int:
	match = _UNICODE.match(text, index)
	if match is None:
		raise StringSyntaxError(index - 1, "a unicode escape like \\u{00E9}")
	code_point = int(match.group(1), 16)
	if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
		raise StringSyntaxError(index - 1, "a unicode escape naming a valid character")
	pieces.append(chr(code_point))
	return match.end()

_ENCODE = {v:'\\'+k for k,v in ESCAPES.items() if k not in "'/"}

def encode_string(content:str) -> str:
	""" Quote content so that decode_string gives it back exactly. """
	out = ['"']
	for c in content:
		if c in _ENCODE: out.append(_ENCODE[c])
		elif ord(c) < 0x20 or ord(c) == 0x7F: out.append('\\u{%X}' % ord(c))
		else: out.append(c)
	out.append('"')
	return ''.join(out)
