"""
Every failure the language can report descends from LogoError.

A LogoError remembers the source line it started on, and gathers a chain
of context lines as it climbs out through the enclosing constructs.
The chain reads outermost-first, so the last line is the actual fault.
"""
from contextlib import contextmanager
from typing import Optional

class LogoError(Exception):
	line: Optional[int]

	def __init__(self, line:Optional[int], description:str):
		super().__init__(description)
		self.line = line
		self.description = description
		self.context = []

	def add_context(self, text:str):
		self.context.append(text)
		return self

	def describe(self) -> str:
		if self.line is None: return self.description
		return "[Line %d]: %s" % (self.line, self.description)

	def chain(self) -> list[str]:
		return list(reversed(self.context)) + [self.describe()]

	def __str__(self):
		lines = self.chain()
		head, causes = lines[0], lines[1:]
		if not causes: return head
		return head + "\n\nCaused by:\n" + "\n".join("    %d: %s" % (i, c) for i, c in enumerate(causes))

@contextmanager
def context(pattern:str, *args):
	""" Anything that goes wrong within gets an extra line of context on its way out. """
	try: yield
	except LogoError as ex:
		ex.add_context(pattern % args if args else pattern)
		raise

###############################################################################

class LexerError(LogoError): pass

class InvalidTokenError(LexerError):
	def __init__(self, line:int, word:str):
		super().__init__(line, "Failed to lex input: '%s' is not a valid token" % word)
		self.word = word

###############################################################################

class ParseError(LogoError): pass

class UnexpectedEnding(ParseError):
	def __init__(self, line:Optional[int]):
		super().__init__(line, "Unexpected ending while parsing program.")

class UnexpectedToken(ParseError):
	def __init__(self, line:int, value:str):
		super().__init__(line, "'%s' cannot appear here." % value)

class NonNumericExpr(ParseError):
	def __init__(self, line:int, construct:str):
		super().__init__(line, "Provided expression '%s' will not return a float." % construct)

class NonBooleanExpr(ParseError):
	def __init__(self, line:int, construct:str):
		super().__init__(line, "Provided expression '%s' will not return a boolean." % construct)

class IncorrectArgType(ParseError): pass

class MissingParenthesis(ParseError):
	def __init__(self, line:int, statement:str, expected:str, found:str):
		super().__init__(line, "%s expression is missing parenthesis: expected %s, received %s" % (statement, expected, found))

class InvalidAddAssignTarget(ParseError):
	def __init__(self, line:int, found:str):
		super().__init__(line, "ADDASSIGN needs a variable name, but received '%s'." % found)

class InvalidProcName(ParseError):
	def __init__(self, line:int, found:str):
		super().__init__(line, "'%s' cannot be used as the name of a procedure." % found)

class MissingProcEnd(ParseError):
	def __init__(self, line:int, name:str):
		super().__init__(line, "Procedure '%s' is missing its END." % name)

class InvalidProcReference(ParseError):
	def __init__(self, line:int, name:str):
		super().__init__(line, "Referenced procedure %s does not exist." % name)

class ExtraArguments(ParseError):
	def __init__(self, line:int, value:str):
		super().__init__(line, "Too many arguments on this line; '%s' is left over." % value)

###############################################################################

class InterpreterError(LogoError): pass

class ValueTypeError(InterpreterError): pass

class InvalidVariableRef(InterpreterError):
	def __init__(self, line:Optional[int], name:str):
		super().__init__(line, "Variable %s does not exist." % name)
		self.name = name

class DrawLineError(InterpreterError):
	def __init__(self, line:int, direction:str, cause:"DrawError"):
		super().__init__(line, "Failed to draw line for direction %s: %s" % (direction, cause.description))
		self.cause = cause

class InvalidPenColor(InterpreterError):
	def __init__(self, line:int, value:float):
		super().__init__(line, "%s is not a pen color. Use a whole number from 0 to 15." % value)
		self.value = value

class InvalidProcedureRef(InterpreterError):
	def __init__(self, line:int, name:str):
		super().__init__(line, "Referenced procedure %s does not exist." % name)

###############################################################################

class DrawError(LogoError): pass

class ImgFileError(LogoError): pass

class UnsupportedFileExtension(ImgFileError):
	def __init__(self, path):
		super().__init__(None, "Image file extension of '%s' is not supported. Please use .svg, .png, .bmp, .tga or .jpg" % path)
