"""
This is an evaluator for the Konfi configuration language.

{0}

For example:

    konfi settings.konfi

will print the configuration in settings.konfi as JSON if possible,
or else try to explain why not.

    konfi -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="konfi",
	description="Evaluator for the Konfi configuration language.",
)
parser.add_argument("program", help="the Konfi source file to evaluate.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program but do not evaluate it.")
parser.add_argument("--compact", action="store_true", help="Print the JSON result on one line.")
parser.add_argument('-v', "--verbose", action="count", help="Say what is happening along the way.")

def read_document(path:Path, report):
	from .diagnostics import Document
	report.info("Reading", path)
	try: text = path.read_text(encoding="utf-8")
	except FileNotFoundError: report.no_such_file(path)
	except (OSError, UnicodeDecodeError) as ex: report.broken_file(path, str(ex))
	else: return Document(text, path)

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_text
	from .evaluator import evaluate_module
	from .faults import EvalError
	from .json_out import dumps, SerializationError
	report = Report(verbose=args.verbose)
	try:
		document = read_document(Path(args.program), report)
		if document is None:
			report.complain_to_console()
			return 1
		module = parse_text(document, report)
		if module is None:
			report.complain_to_console()
			return 1
		assert report.ok()
		if args.check:
			print("Looks plausible to me.", file=sys.stderr)
			return 0
		report.info("Evaluating", document.path)
		try:
			text = dumps(evaluate_module(module), pretty=not args.compact)
		except EvalError as ex:
			report.eval_error(document, ex)
		except SerializationError as ex:
			report.serialization_error(ex)
		if report.sick():
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		return 1
	print(text)
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
