import sys, random
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Nuts', 'Rats',
	]
	resignations = [
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'That configuration will not do.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Document:
	""" Source text, where it came from, and the means to point into it. """
	def __init__(self, text:str, path:Optional[Path]=None):
		self.text = text
		self.path = path
		if path is None: self.source = SourceText(text)
		else: self.source = SourceText(text, filename=str(path))

class Report:
	""" Collects the issues of one run, then shows them to the user all at once. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	# Methods the command-line driver is likely to call:

	def _file_error(self, path:Path, prefix:str, footer=()):
		self.issue(Pic(prefix+" "+str(path), [], footer))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path, reason:str):
		self._file_error(path, "Something went pear-shaped while trying to read", [reason])

	# Methods for the parser:

	def parse_error(self, document:Document, ex):
		intro = "Konfi got confused while parsing."
		problem = [Annotation(document, slice(ex.offset, ex.offset+1), "Expected "+ex.expected)]
		self.issue(Pic(intro, problem))

	# Methods for the evaluator and serializer:

	def eval_error(self, document:Document, ex):
		intro = ex.describe()
		if ex.site is None: problem = []
		else: problem = [Annotation(document, ex.site.span(), "while evaluating this")]
		self.issue(Pic(intro, problem))

	def serialization_error(self, ex):
		intro = "The result cannot be written out as JSON."
		self.issue(Pic(intro, [], [str(ex)]))

class Annotation:
	document: Document
	slice: slice
	caption: str
	def __init__(self, document:Document, where:slice, caption:str=""):
		self.document = document
		self.slice = where
		self.caption = caption

	@property
	def path(self): return self.document.path

	def illustrate(self):
		text = self.document.text
		if not text: return "      | (the text is empty)"
		# Errors at the very end of the text point at its last character.
		start = min(self.slice.start, len(text) - 1)
		end_of_line = text.find("\n", start)
		if end_of_line < 0: end_of_line = len(text)
		width = max(1, min(self.slice.stop, end_of_line) - start)
		source = self.document.source
		row, col = source.find_row_col(start)
		single_line = source.line_of_text(row)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
