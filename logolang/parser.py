"""
Recursive-descent parser: consumes tokens strictly left to right
and builds the list of top-level statements.

The leading token of every phrase decides, all by itself, which production applies.
There is no backtracking and no lookahead beyond that one token.

Type checking here is only by shape (see syntax.Node). Whether an
identifier-reference holds a number, a boolean, or a word is a question
for the interpreter.
"""
from collections import deque
from typing import Iterable
from .lexer import Token, TokenKind
from .values import single
from .errors import (
	context, UnexpectedEnding, UnexpectedToken, NonNumericExpr, NonBooleanExpr,
	IncorrectArgType, MissingParenthesis, InvalidAddAssignTarget, InvalidProcName,
	MissingProcEnd, InvalidProcReference, ExtraArguments,
)
from . import syntax

# Tokens which can only ever be an argument; one of these left over on a line is a mistake.
_VALUE_KINDS = frozenset([TokenKind.NUM, TokenKind.IDENT, TokenKind.IDENTREF, TokenKind.QUERY])

def _agree(left:syntax.Node, right:syntax.Node) -> bool:
	return (
		(left.is_numeric() and right.is_numeric())
		or (left.is_boolean() and right.is_boolean())
		or (left.is_word() and right.is_word())
	)

class Parser:
	procedures: dict[str, list[str]]

	def __init__(self):
		# Parameter names of every procedure seen so far, in declaration order.
		self.procedures = {}
		self._tokens = deque()
		self._last_line = None

	def parse(self, tokens:Iterable[Token]) -> list[syntax.Node]:
		self._tokens = deque(tokens)
		self._last_line = None
		ast = []
		while self._tokens:
			ast.append(self.statement())
		return ast

	# ------------------------------------------------------------------ helpers

	def _take(self) -> Token:
		if not self._tokens: raise UnexpectedEnding(self._last_line)
		token = self._tokens.popleft()
		self._last_line = token.line
		return token

	def _peek_kind(self):
		return self._tokens[0].kind if self._tokens else None

	def statement(self) -> syntax.Node:
		node = self.expr()
		if self._tokens:
			following = self._tokens[0]
			if following.line == self._last_line and following.kind in _VALUE_KINDS:
				raise ExtraArguments(following.line, following.value)
		return node

	def expr(self) -> syntax.Node:
		if not self._tokens: raise UnexpectedEnding(self._last_line)
		production = _PRODUCTIONS[self._tokens[0].kind]
		return production(self)

	# ------------------------------------------------------------------ terminals

	def _num(self):
		token = self._take()
		return syntax.Num(single(float(token.value)), token.line)

	def _word(self):
		token = self._take()
		return syntax.Word(token.value, token.line)

	def _ident_ref(self):
		token = self._take()
		return syntax.IdentRef(token.value, token.line)

	def _query(self):
		token = self._take()
		return syntax.Query(token.value, token.line)

	def _stray(self):
		token = self._take()
		raise UnexpectedToken(token.line, token.value)

	# ------------------------------------------------------------------ expressions

	def _binary(self):
		op = self._take()
		with context("[Line %d]: The first argument to binary operator '%s' is invalid.", op.line, op.value):
			left = self.expr()
		with context("[Line %d]: The second argument to binary operator '%s' is invalid.", op.line, op.value):
			right = self.expr()

		if op.kind is TokenKind.ARITHOP:
			if not (left.is_numeric() and right.is_numeric()):
				raise NonNumericExpr(op.line, op.value)
			return syntax.ArithExpr(op.value, left, right, op.line)

		if op.kind is TokenKind.COMPOP:
			if op.value in ("GT", "LT"):
				if not (left.is_numeric() and right.is_numeric()):
					raise NonNumericExpr(op.line, op.value)
			elif not _agree(left, right):
				raise IncorrectArgType(op.line, "The arguments to '%s' are not both numbers, booleans, or words." % op.value)
			return syntax.CompExpr(op.value, left, right, op.line)

		assert op.kind is TokenKind.BOOLOP, op
		if not (left.is_boolean() and right.is_boolean()):
			raise NonBooleanExpr(op.line, op.value)
		return syntax.BoolExpr(op.value, left, right, op.line)

	# ------------------------------------------------------------------ statements

	def _make(self):
		make = self._take()
		target = self._take()
		if target.kind is not TokenKind.IDENT:
			raise IncorrectArgType(make.line, "Invalid MAKE expression. MAKE did not receive a variable, instead received: %s." % target.value)
		with context("[Line %d]: Invalid MAKE operation: Failed to parse expression provided to '%s'", target.line, target.value):
			expr = self.expr()
		if not expr.is_value():
			raise IncorrectArgType(make.line, "MAKE \"%s needs a number, a boolean, or a word." % target.value)
		return syntax.Assignment(target.value, expr, make.line)

	def _add_assign(self):
		head = self._take()
		target = self._take()
		if target.kind not in (TokenKind.IDENT, TokenKind.PROCNAME):
			raise InvalidAddAssignTarget(target.line, target.value)
		with context("[Line %d]: Invalid ADDASSIGN: Failed to parse the number to add to '%s'", head.line, target.value):
			expr = self.expr()
		if not expr.is_numeric():
			raise NonNumericExpr(head.line, head.value)
		return syntax.AddAssign(target.value, expr, head.line)

	def _move(self):
		head = self._take()
		with context("[Line %d]: Invalid %s: Failed to parse the distance.", head.line, head.value):
			distance = self.expr()
		if not distance.is_numeric():
			raise NonNumericExpr(head.line, head.value)
		return syntax.Move(head.value, distance, head.line)

	def _pen_status(self):
		head = self._take()
		return syntax.PenStatus(head.value == "PENDOWN", head.line)

	def _pen_color(self):
		head = self._take()
		with context("[Line %d]: Invalid argument to %s.", head.line, head.value):
			expr = self.expr()
		if not expr.is_numeric():
			raise NonNumericExpr(head.line, head.value)
		return syntax.PenColor(expr, head.line)

	def _pen_position(self):
		head = self._take()
		with context("[Line %d]: Invalid argument to %s.", head.line, head.value):
			value = self.expr()
		if not value.is_numeric():
			raise NonNumericExpr(head.line, head.value)
		return syntax.PenPosition(head.value, value, head.line)

	def _block(self, cls):
		head = self._take()
		with context("[Line %d]: Invalid %s statement condition.", head.line, head.value):
			condition = self.expr()
		if not condition.is_boolean():
			raise NonBooleanExpr(head.line, head.value)

		if not self._tokens:
			raise MissingParenthesis(head.line, head.value, "[", "end of input")
		opener = self._take()
		if opener.kind is not TokenKind.LBRACKET:
			raise MissingParenthesis(opener.line, head.value, "[", opener.value)

		body = []
		while self._peek_kind() is not TokenKind.RBRACKET:
			if not self._tokens:
				raise MissingParenthesis(self._last_line, head.value, "]", "end of input")
			if self._peek_kind() is TokenKind.PROCEND:
				raise MissingParenthesis(self._tokens[0].line, head.value, "]", self._tokens[0].value)
			with context("[Line %d]: Invalid statement in the body of the %s statement.", head.line, head.value):
				body.append(self.statement())
		self._take()
		return cls(condition, body, head.line)

	def _if(self): return self._block(syntax.IfStatement)

	def _while(self): return self._block(syntax.WhileStatement)

	def _procedure(self):
		head = self._take()
		name = self._take()
		if name.kind is not TokenKind.PROCNAME:
			raise InvalidProcName(name.line, name.value)
		params = []
		while self._peek_kind() is TokenKind.IDENT:
			params.append(self._take().value)

		# Recorded before the body, so the body may call its own procedure.
		self.procedures[name.value] = params

		body = []
		while self._peek_kind() is not TokenKind.PROCEND:
			if not self._tokens:
				raise MissingProcEnd(head.line, name.value)
			with context("[Line %d]: Invalid statement in the body of procedure %s.", head.line, name.value):
				body.append(self.statement())
		self._take()
		return syntax.Procedure(name.value, params, body, head.line)

	def _call(self):
		"""
		Argument binding happens right here: each argument becomes
		an ordinary assignment to the matching parameter name,
		to be run just before the procedure's body.
		"""
		head = self._take()
		try: params = self.procedures[head.value]
		except KeyError: raise InvalidProcReference(head.line, head.value) from None
		args = []
		for position, param in enumerate(params, start=1):
			with context("[Line %d]: Failed to parse argument %d ('%s') to procedure %s.", head.line, position, param, head.value):
				expr = self.expr()
			if not expr.is_value():
				raise IncorrectArgType(head.line, "Argument '%s' to procedure %s needs a number, a boolean, or a word." % (param, head.value))
			args.append(syntax.Assignment(param, expr, head.line))
		return syntax.ProcedureCall(head.value, args, head.line)


_PRODUCTIONS = {
	TokenKind.MAKE: Parser._make,
	TokenKind.ARITHOP: Parser._binary,
	TokenKind.COMPOP: Parser._binary,
	TokenKind.BOOLOP: Parser._binary,
	TokenKind.DIRECTION: Parser._move,
	TokenKind.IDENT: Parser._word,
	TokenKind.IDENTREF: Parser._ident_ref,
	TokenKind.ADDASSIGN: Parser._add_assign,
	TokenKind.NUM: Parser._num,
	TokenKind.IF: Parser._if,
	TokenKind.WHILE: Parser._while,
	TokenKind.LBRACKET: Parser._stray,
	TokenKind.RBRACKET: Parser._stray,
	TokenKind.PENSTATUS: Parser._pen_status,
	TokenKind.PENCOLOR: Parser._pen_color,
	TokenKind.PENPOS: Parser._pen_position,
	TokenKind.QUERY: Parser._query,
	TokenKind.PROCSTART: Parser._procedure,
	TokenKind.PROCEND: Parser._stray,
	TokenKind.PROCNAME: Parser._call,
}

def parse(tokens:Iterable[Token]) -> list[syntax.Node]:
	return Parser().parse(tokens)
