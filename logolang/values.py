"""
The three kinds of value a variable can hold at run-time.
Two values are equal only when they are the same kind of value.

Numbers in the language are single-precision.
Python does its arithmetic in doubles, so every result passes through single().
"""
import math, struct

def single(x:float) -> float:
	""" Round to the nearest 32-bit float, overflowing to infinity. """
	try: return struct.unpack('f', struct.pack('f', x))[0]
	except OverflowError: return math.copysign(math.inf, x)

class Value:
	__slots__ = ("value",)
	kind = "value"
	def __init__(self, value): self.value = value
	def __eq__(self, other): return type(self) is type(other) and self.value == other.value
	def __ne__(self, other): return not self == other
	def __hash__(self): return hash((type(self), self.value))
	def __repr__(self): return "%s(%r)" % (type(self).__name__, self.value)
	def __str__(self): return str(self.value)

class Float(Value):
	__slots__ = ()
	kind = "float"
	def __init__(self, value): super().__init__(single(float(value)))
	def __str__(self): return "%g" % self.value

class Bool(Value):
	__slots__ = ()
	kind = "boolean"
	def __init__(self, value): super().__init__(bool(value))
	def __str__(self): return "TRUE" if self.value else "FALSE"

class Word(Value):
	__slots__ = ()
	kind = "word"
	def __init__(self, value): super().__init__(str(value))
