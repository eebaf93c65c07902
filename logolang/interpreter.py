"""
The tree-walking interpreter.

Statements are dispatched by node type through the Visitor protocol.
Expressions get evaluated according to what the surrounding construct needs:
a number, a boolean, or any value at all. The parser only checked shapes,
so an identifier-reference can still turn out to hold the wrong kind of value.
That is where most run-time type errors come from.

There is exactly one variable namespace. Procedure calls write their
arguments straight into it, and a procedure's body sees (and can clobber)
every variable in the program. That is the language, not an accident.
"""
import math
from typing import Sequence
from boozetools.support.foundation import Visitor

from . import syntax
from .canvas import Canvas, end_coordinates
from .errors import (
	context, DrawError, ValueTypeError, InvalidVariableRef, DrawLineError,
	InvalidPenColor, InvalidProcedureRef,
)
from .values import Value, Float, Bool, Word, single

# Degrees added to the turtle's heading for each way it can move.
OFFSETS = {"FORWARD": 0, "BACK": 180, "LEFT": 270, "RIGHT": 90}

DEFAULT_COLOR = 7  # white

def _divide(a:float, b:float) -> float:
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

ARITHMETIC = {
	"+": lambda a, b: a + b,
	"-": lambda a, b: a - b,
	"*": lambda a, b: a * b,
	"/": _divide,
}

class Turtle:
	def __init__(self, x:float, y:float):
		self.x, self.y = x, y
		self.heading = 0.0
		self.color = DEFAULT_COLOR
		self.pen_down = False
	def __repr__(self):
		return "<Turtle (%g, %g) heading %g color %d pen %s>" % (
			self.x, self.y, self.heading, self.color, "down" if self.pen_down else "up"
		)

class Interpreter(Visitor):
	environment: dict[str, Value]
	procedures: dict[str, list]

	def __init__(self, canvas:Canvas):
		self.canvas = canvas
		self.environment = {}
		self.procedures = {}
		self.turtle = Turtle(canvas.width / 2, canvas.height / 2)

	def run(self, ast:Sequence[syntax.Node]) -> Canvas:
		with context("Failed to evaluate program"):
			self.execute(ast)
		return self.canvas

	def execute(self, statements:Sequence[syntax.Node]):
		for node in statements: self.visit(node)

	# ------------------------------------------------------------------ statements

	def visit_Assignment(self, node:syntax.Assignment):
		with context("[Line %d]: Invalid MAKE statement: Failed to evaluate expression passed to %s", node.line, node.var):
			self.environment[node.var] = self.value(node.expr, node.line)

	def visit_AddAssign(self, node:syntax.AddAssign):
		with context("[Line %d]: Invalid ADDASSIGN: Failed to add number to '%s'", node.line, node.var):
			amount = self.numeric(node.expr, node.line)
		try: current = self.environment[node.var]
		except KeyError: raise InvalidVariableRef(node.line, node.var) from None
		if not isinstance(current, Float):
			raise ValueTypeError(node.line, "ADDASSIGN can only add to a float, but '%s' holds the %s value %s." % (node.var, current.kind, current))
		self.environment[node.var] = Float(current.value + amount)

	def visit_Move(self, node:syntax.Move):
		with context("[Line %d]: Invalid %s: Failed to evaluate the distance.", node.line, node.direction):
			distance = self.numeric(node.distance, node.line)
		t = self.turtle
		heading = single(t.heading + OFFSETS[node.direction])
		if t.pen_down:
			try: stop = self.canvas.draw_line(t.x, t.y, heading, distance, t.color)
			except DrawError as ex: raise DrawLineError(node.line, node.direction, ex) from ex
		else:
			stop = end_coordinates(t.x, t.y, heading, distance)
		t.x, t.y = map(single, stop)

	def _condition(self, node:syntax.Block) -> bool:
		with context("[Line %d]: Invalid %s statement condition.", node.line, node.keyword):
			return self.logic(node.condition, node.line)

	def visit_IfStatement(self, node:syntax.IfStatement):
		if self._condition(node):
			with context("[Line %d]: Invalid statement in the body of the IF statement.", node.line):
				self.execute(node.body)

	def visit_WhileStatement(self, node:syntax.WhileStatement):
		while self._condition(node):
			with context("[Line %d]: Invalid statement in the body of the WHILE statement.", node.line):
				self.execute(node.body)

	def visit_PenStatus(self, node:syntax.PenStatus):
		self.turtle.pen_down = node.down

	def visit_PenColor(self, node:syntax.PenColor):
		with context("[Line %d]: Invalid argument to SETPENCOLOR.", node.line):
			value = self.numeric(node.expr, node.line)
		# Must be exactly a whole number, not merely in range.
		if math.isfinite(value) and value == int(value) and 0 <= value <= 15:
			self.turtle.color = int(value)
		else:
			raise InvalidPenColor(node.line, value)

	def visit_PenPosition(self, node:syntax.PenPosition):
		with context("[Line %d]: Invalid argument to %s.", node.line, node.kind):
			value = self.numeric(node.value, node.line)
		t = self.turtle
		if node.kind == "SETX": t.x = value
		elif node.kind == "SETY": t.y = value
		elif node.kind == "SETHEADING": t.heading = value
		else:
			assert node.kind == "TURN", node.kind
			t.heading = single(t.heading + value)

	def visit_Procedure(self, node:syntax.Procedure):
		self.procedures[node.name] = node.body

	def visit_ProcedureCall(self, node:syntax.ProcedureCall):
		with context("[Line %d]: Failed to bind provided arguments to %s's parameters.", node.line, node.name):
			self.execute(node.args)
		try: body = self.procedures[node.name]
		except KeyError: raise InvalidProcedureRef(node.line, node.name) from None
		with context("[Line %d]: Failed to evaluate body of procedure %s.", node.line, node.name):
			self.execute(body)

	# Expressions standing alone as statements: evaluate for the errors, ignore the result.
	def visit_ArithExpr(self, node:syntax.ArithExpr): self.arithmetic(node)
	def visit_CompExpr(self, node:syntax.CompExpr): self.compare(node)
	def visit_BoolExpr(self, node:syntax.BoolExpr): self.boolean(node)

	# Terminals standing alone do nothing at all.
	def visit_Num(self, node:syntax.Num): pass
	def visit_Word(self, node:syntax.Word): pass
	def visit_IdentRef(self, node:syntax.IdentRef): pass
	def visit_Query(self, node:syntax.Query): pass

	# ------------------------------------------------------------------ expressions

	def lookup(self, ref:syntax.IdentRef) -> Value:
		try: return self.environment[ref.name]
		except KeyError: raise InvalidVariableRef(ref.line, ref.name) from None

	def query(self, node:syntax.Query) -> float:
		t = self.turtle
		return {
			"XCOR": t.x,
			"YCOR": t.y,
			"HEADING": t.heading,
			"COLOR": float(t.color),
		}[node.kind]

	def numeric(self, node:syntax.Node, line:int) -> float:
		if isinstance(node, syntax.Num): return node.value
		if isinstance(node, syntax.ArithExpr): return self.arithmetic(node)
		if isinstance(node, syntax.Query): return self.query(node)
		if isinstance(node, syntax.IdentRef):
			value = self.lookup(node)
			if isinstance(value, Float): return value.value
			raise ValueTypeError(line, "variable '%s' is assigned to the %s value %s, not a float." % (node.name, value.kind, value))
		raise ValueTypeError(line, "%r does not produce a number." % node)

	def logic(self, node:syntax.Node, line:int) -> bool:
		if isinstance(node, syntax.CompExpr): return self.compare(node)
		if isinstance(node, syntax.BoolExpr): return self.boolean(node)
		if isinstance(node, syntax.IdentRef):
			value = self.lookup(node)
			if isinstance(value, Bool): return value.value
			raise ValueTypeError(line, "variable '%s' is assigned to the %s value %s, not a bool." % (node.name, value.kind, value))
		raise ValueTypeError(line, "%r does not produce a boolean." % node)

	def value(self, node:syntax.Node, line:int) -> Value:
		""" Any kind of value will do; the expression itself decides which. """
		if isinstance(node, syntax.IdentRef): return self.lookup(node)
		if isinstance(node, syntax.Word): return Word(node.text)
		if node.is_numeric(): return Float(self.numeric(node, line))
		if node.is_boolean(): return Bool(self.logic(node, line))
		raise ValueTypeError(line, "%r does not produce a value." % node)

	def arithmetic(self, node:syntax.ArithExpr) -> float:
		with context("[Line %d]: Failed to evaluate first argument to operator '%s'", node.line, node.operator):
			left = self.numeric(node.left, node.line)
		with context("[Line %d]: Failed to evaluate second argument to operator '%s'", node.line, node.operator):
			right = self.numeric(node.right, node.line)
		return single(ARITHMETIC[node.operator](left, right))

	def _operand(self, node:syntax.Node, line:int) -> Value:
		# Each side of EQ or NE is evaluated according to its own shape.
		if node.is_word():
			return self.lookup(node) if isinstance(node, syntax.IdentRef) else Word(node.text)
		if node.is_numeric(): return Float(self.numeric(node, line))
		if node.is_boolean(): return Bool(self.logic(node, line))
		raise ValueTypeError(line, "%r is a statement, and cannot be compared." % node)

	def compare(self, node:syntax.CompExpr) -> bool:
		op = node.operator
		if op in ("GT", "LT"):
			with context("[Line %d]: Failed to evaluate first argument to %s", node.line, op):
				left = self.numeric(node.left, node.line)
			with context("[Line %d]: Failed to evaluate second argument to %s", node.line, op):
				right = self.numeric(node.right, node.line)
			return left > right if op == "GT" else left < right

		with context("[Line %d]: Failed to evaluate first argument to %s", node.line, op):
			left = self._operand(node.left, node.line)
		with context("[Line %d]: Failed to evaluate second argument to %s", node.line, op):
			right = self._operand(node.right, node.line)
		if type(left) is not type(right):
			raise ValueTypeError(node.line, "Arguments to %s do not have matching types: %s %s versus %s %s." % (
				op, left.kind, left, right.kind, right
			))
		return (left == right) if op == "EQ" else (left != right)

	def boolean(self, node:syntax.BoolExpr) -> bool:
		with context("[Line %d]: Failed to evaluate first argument to %s", node.line, node.operator):
			left = self.logic(node.left, node.line)
		with context("[Line %d]: Failed to evaluate second argument to %s", node.line, node.operator):
			right = self.logic(node.right, node.line)
		return (left and right) if node.operator == "AND" else (left or right)
