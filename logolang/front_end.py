"""
Text in, syntax tree out. Anything that goes wrong lands in the report.
"""
from pathlib import Path
from typing import Optional

from .errors import LexerError, ParseError
from .lexer import tokenize
from .parser import Parser
from .diagnostics import Report
from . import syntax

def parse_text(text:str, report:Report, path:Optional[Path]=None) -> Optional[list[syntax.Node]]:
	""" Submit text to lexer and parser; the result is None if either one complains. """
	report.source(text, path)
	try:
		tokens = tokenize(text)
		report.info("Lexed", len(tokens), "tokens")
		ast = Parser().parse(tokens)
		report.info("Parsed", len(ast), "top-level statements")
		return ast
	except LexerError as ex:
		report.issue(ex.add_context("Failed to lex %s" % (path or "script")))
	except ParseError as ex:
		report.issue(ex.add_context("Failed to parse %s" % (path or "script")))

def parse_file(path:Path, report:Report) -> Optional[list[syntax.Node]]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError as ex:
		report.broken_file(path, ex)
	else:
		report.info("Parse", path)
		return parse_text(text, report, path)
