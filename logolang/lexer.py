"""
Turn script text into a list of classified tokens.

Words are separated by whitespace. A line whose first non-blank characters
are // is a comment. Everything else is pure keyword/pattern classification.
"""
import re
from enum import Enum
from typing import NamedTuple
from .errors import InvalidTokenError

class TokenKind(Enum):
	MAKE = "MAKE"
	ARITHOP = "ARITHOP"
	COMPOP = "COMPOP"
	BOOLOP = "BOOLOP"
	DIRECTION = "DIRECTION"
	IDENT = "IDENT"
	IDENTREF = "IDENTREF"
	ADDASSIGN = "ADDASSIGN"
	NUM = "NUM"
	IF = "IF"
	WHILE = "WHILE"
	LBRACKET = "LBRACKET"
	RBRACKET = "RBRACKET"
	PENSTATUS = "PENSTATUS"
	PENCOLOR = "PENCOLOR"
	PENPOS = "PENPOS"
	QUERY = "QUERY"
	PROCSTART = "PROCSTART"
	PROCEND = "PROCEND"
	PROCNAME = "PROCNAME"

class Token(NamedTuple):
	kind: TokenKind
	value: str
	line: int    # 1-based
	column: int  # 0-based
	def __repr__(self): return "<%s %r @%d>" % (self.kind.name, self.value, self.line)

ARITH_ALIASES = {"ADD": "+", "SUB": "-", "MUL": "*", "DIV": "/"}

KEYWORDS = {
	"MAKE": TokenKind.MAKE,
	"+": TokenKind.ARITHOP, "-": TokenKind.ARITHOP, "*": TokenKind.ARITHOP, "/": TokenKind.ARITHOP,
	"EQ": TokenKind.COMPOP, "NE": TokenKind.COMPOP, "GT": TokenKind.COMPOP, "LT": TokenKind.COMPOP,
	"AND": TokenKind.BOOLOP, "OR": TokenKind.BOOLOP,
	"ADDASSIGN": TokenKind.ADDASSIGN,
	"FORWARD": TokenKind.DIRECTION, "BACK": TokenKind.DIRECTION,
	"LEFT": TokenKind.DIRECTION, "RIGHT": TokenKind.DIRECTION,
	"PENUP": TokenKind.PENSTATUS, "PENDOWN": TokenKind.PENSTATUS,
	"SETPENCOLOR": TokenKind.PENCOLOR,
	"SETX": TokenKind.PENPOS, "SETY": TokenKind.PENPOS,
	"SETHEADING": TokenKind.PENPOS, "TURN": TokenKind.PENPOS,
	"XCOR": TokenKind.QUERY, "YCOR": TokenKind.QUERY,
	"HEADING": TokenKind.QUERY, "COLOR": TokenKind.QUERY,
	"IF": TokenKind.IF,
	"WHILE": TokenKind.WHILE,
	"[": TokenKind.LBRACKET,
	"]": TokenKind.RBRACKET,
	"TO": TokenKind.PROCSTART,
	"END": TokenKind.PROCEND,
}

_NUMBER = re.compile(r"[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")
_NAME = re.compile(r"\w+$")
_ALPHA = re.compile(r"[^\W\d_]+$")

def classify(word:str, line:int, column:int=0) -> Token:
	""" Decide what kind of token one whitespace-delimited word is. """
	if word in ARITH_ALIASES:
		return Token(TokenKind.ARITHOP, ARITH_ALIASES[word], line, column)
	if word in KEYWORDS:
		return Token(KEYWORDS[word], word, line, column)
	if word.startswith('"'):
		rest = word[1:]
		if _NUMBER.match(rest): return Token(TokenKind.NUM, rest, line, column)
		if _NAME.match(rest): return Token(TokenKind.IDENT, rest, line, column)
	elif word.startswith(':'):
		if _NAME.match(word[1:]): return Token(TokenKind.IDENTREF, word[1:], line, column)
	elif _NUMBER.match(word):
		return Token(TokenKind.NUM, word, line, column)
	elif _ALPHA.match(word):
		return Token(TokenKind.PROCNAME, word, line, column)
	raise InvalidTokenError(line, word)

def tokenize(text:str) -> list[Token]:
	tokens = []
	for line_no, line in enumerate(text.splitlines(), start=1):
		if line.lstrip().startswith("//"):
			continue
		for match in re.finditer(r"\S+", line):
			tokens.append(classify(match.group(), line_no, match.start()))
	return tokens
