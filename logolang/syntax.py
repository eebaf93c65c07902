"""
The set of parse-nodes.
The parser builds these top-down as it consumes tokens; the interpreter walks them.

Each node knows its source line and which syntactic shapes it can take.
Shape is only a loose, early guess at type: an identifier-reference
could turn out to be any of the three, so it claims to be all of them.
"""
from typing import Sequence

class Node:
	line: int
	def is_numeric(self) -> bool: return False
	def is_boolean(self) -> bool: return False
	def is_word(self) -> bool: return False
	def is_value(self) -> bool: return self.is_numeric() or self.is_boolean() or self.is_word()

class Statement(Node): pass

class Expression(Node): pass

###############################################################################

class Num(Expression):
	def __init__(self, value:float, line:int):
		self.value, self.line = value, line
	def is_numeric(self): return True
	def __repr__(self): return "<num %s>" % self.value

class Word(Expression):
	""" A quoted word in a spot where nothing governs it. It stands for its own text. """
	def __init__(self, text:str, line:int):
		self.text, self.line = text, line
	def is_word(self): return True
	def __repr__(self): return "<word %s>" % self.text

class IdentRef(Expression):
	def __init__(self, name:str, line:int):
		self.name, self.line = name, line
	def is_numeric(self): return True
	def is_boolean(self): return True
	def is_word(self): return True
	def __repr__(self): return "<ref :%s>" % self.name

class Query(Expression):
	""" XCOR, YCOR, HEADING, or COLOR """
	def __init__(self, kind:str, line:int):
		self.kind, self.line = kind, line
	def is_numeric(self): return True
	def __repr__(self): return "<%s>" % self.kind

class BinExp(Expression):
	def __init__(self, operator:str, left:Expression, right:Expression, line:int):
		self.operator, self.left, self.right, self.line = operator, left, right, line
	def __repr__(self): return "(%s %r %r)" % (self.operator, self.left, self.right)

class ArithExpr(BinExp):
	def is_numeric(self): return True

class CompExpr(BinExp):
	def is_boolean(self): return True

class BoolExpr(BinExp):
	def is_boolean(self): return True

###############################################################################

class Assignment(Statement):
	""" MAKE, and also the argument-bindings the parser plants at every procedure call. """
	def __init__(self, var:str, expr:Expression, line:int):
		self.var, self.expr, self.line = var, expr, line
	def __repr__(self): return "<make %s %r>" % (self.var, self.expr)

class AddAssign(Statement):
	def __init__(self, var:str, expr:Expression, line:int):
		self.var, self.expr, self.line = var, expr, line

class Block(Statement):
	condition: Expression
	body: Sequence[Node]
	def __init__(self, condition:Expression, body:Sequence[Node], line:int):
		self.condition, self.body, self.line = condition, body, line

class IfStatement(Block): keyword = "IF"

class WhileStatement(Block): keyword = "WHILE"

class PenStatus(Statement):
	def __init__(self, down:bool, line:int):
		self.down, self.line = down, line

class PenColor(Statement):
	def __init__(self, expr:Expression, line:int):
		self.expr, self.line = expr, line

class PenPosition(Statement):
	""" SETX, SETY, SETHEADING, or TURN """
	def __init__(self, kind:str, value:Expression, line:int):
		self.kind, self.value, self.line = kind, value, line

class Move(Statement):
	""" FORWARD, BACK, LEFT, or RIGHT """
	def __init__(self, direction:str, distance:Expression, line:int):
		self.direction, self.distance, self.line = direction, distance, line

class Procedure(Statement):
	"""
	The body list is shared, not copied, with the interpreter's procedure table.
	Every call to the procedure runs this same list.
	"""
	def __init__(self, name:str, params:Sequence[str], body:list, line:int):
		self.name, self.params, self.body, self.line = name, params, body, line
	def __repr__(self): return "<TO %s %s>" % (self.name, ' '.join(self.params))

class ProcedureCall(Statement):
	args: Sequence[Assignment]
	def __init__(self, name:str, args:Sequence[Assignment], line:int):
		self.name, self.args, self.line = name, args, line
	def __repr__(self): return "<call %s %r>" % (self.name, list(self.args))
