import math
import unittest
from unittest import mock

from logolang.lexer import tokenize
from logolang.parser import parse
from logolang.canvas import Canvas, COLORS
from logolang.interpreter import Interpreter, DEFAULT_COLOR
from logolang.values import Float, Bool, Word
from logolang import syntax, errors

def interpreter(width=400, height=400):
	return Interpreter(Canvas(width, height))

def run(text, width=400, height=400):
	it = interpreter(width, height)
	it.run(parse(tokenize(text)))
	return it

class VariableTests(unittest.TestCase):

	def test_make(self):
		it = run('MAKE "x ADD 2 3')
		self.assertEqual(Float(5.0), it.environment["x"])

	def test_add_assign(self):
		it = run('MAKE "x ADD 2 3\nADDASSIGN "x 3')
		self.assertEqual(Float(8.0), it.environment["x"])

	def test_add_assign_needs_a_declared_variable(self):
		with self.assertRaises(errors.InvalidVariableRef) as cm:
			run('PENDOWN\nADDASSIGN "x 3')
		self.assertEqual(2, cm.exception.line)

	def test_add_assign_needs_a_float(self):
		with self.assertRaises(errors.ValueTypeError):
			run('MAKE "w "hi\nADDASSIGN "w 1')

	def test_words_and_booleans(self):
		it = run('MAKE "w "hello\nMAKE "b EQ 1 1\nMAKE "same EQ :w "hello\nMAKE "copy :w')
		self.assertEqual(Word("hello"), it.environment["w"])
		self.assertEqual(Bool(True), it.environment["b"])
		self.assertEqual(Bool(True), it.environment["same"])
		self.assertEqual(Word("hello"), it.environment["copy"])

	def test_values_of_different_kinds_are_never_equal(self):
		self.assertNotEqual(Float(1), Bool(True))
		self.assertNotEqual(Word("5"), Float(5))

	def test_reassignment_may_change_kind(self):
		it = run('MAKE "x 1\nMAKE "x "one')
		self.assertEqual(Word("one"), it.environment["x"])

	def test_undefined_variable(self):
		with self.assertRaises(errors.InvalidVariableRef) as cm:
			run('FORWARD :nowhere')
		self.assertEqual("nowhere", cm.exception.name)

	def test_arithmetic(self):
		it = run('MAKE "a - 10 4\nMAKE "b * 2 DIV 9 3\nMAKE "c / 1 0\nMAKE "d / 0 0')
		self.assertEqual(Float(6.0), it.environment["a"])
		self.assertEqual(Float(6.0), it.environment["b"])
		self.assertEqual(math.inf, it.environment["c"].value)
		self.assertTrue(math.isnan(it.environment["d"].value))

	def test_numbers_are_single_precision(self):
		it = run('MAKE "b EQ + 0.1 0.2 0.3\nMAKE "third / 1 3\nMAKE "big * 1e30 1e30')
		self.assertEqual(Bool(True), it.environment["b"])
		self.assertEqual(0.3333333432674408, it.environment["third"].value)
		self.assertEqual(math.inf, it.environment["big"].value)

	def test_pen_color_within_single_precision_of_a_whole_number(self):
		it = run('SETPENCOLOR 7.00000001\nMAKE "c COLOR')
		self.assertEqual(Float(7.0), it.environment["c"])

	def test_logic(self):
		it = run('MAKE "t AND EQ 1 1 NE 1 2\nMAKE "f OR LT 2 1 GT 1 2\nMAKE "n NE :t :f')
		self.assertEqual(Bool(True), it.environment["t"])
		self.assertEqual(Bool(False), it.environment["f"])
		self.assertEqual(Bool(True), it.environment["n"])


class TypeErrorTests(unittest.TestCase):

	def test_comparing_a_float_with_a_word(self):
		text = 'MAKE "a 1\nMAKE "b "one\nMAKE "c EQ :a :b'
		parse(tokenize(text))  # Fine as far as the parser can tell
		with self.assertRaises(errors.ValueTypeError) as cm:
			run(text)
		self.assertEqual(3, cm.exception.line)

	def test_ordering_words(self):
		with self.assertRaises(errors.ValueTypeError):
			run('MAKE "a "x\nMAKE "b "y\nMAKE "c LT :a :b')

	def test_word_as_distance(self):
		with self.assertRaises(errors.ValueTypeError):
			run('MAKE "w "far\nFORWARD :w')

	def test_number_as_condition(self):
		with self.assertRaises(errors.ValueTypeError):
			run('MAKE "n 1\nIF :n [ PENDOWN ]')

	def test_context_chain(self):
		with self.assertRaises(errors.ValueTypeError) as cm:
			run('MAKE "w "far\nPENDOWN\nFORWARD + 1 :w')
		chain = cm.exception.chain()
		self.assertEqual("Failed to evaluate program", chain[0])
		self.assertIn("FORWARD", chain[1])
		self.assertIn("second argument to operator '+'", chain[2])
		self.assertIn("[Line 3]", chain[-1])
		self.assertIn("Caused by:", str(cm.exception))


class TurtleTests(unittest.TestCase):

	def test_initial_state(self):
		it = interpreter(300, 200)
		t = it.turtle
		self.assertEqual((150, 100, 0, DEFAULT_COLOR, False), (t.x, t.y, t.heading, t.color, t.pen_down))

	def test_pen_up_moves_without_drawing(self):
		it = interpreter()
		with mock.patch.object(it.canvas, "draw_line", wraps=it.canvas.draw_line) as draw_line:
			it.run(parse(tokenize('SETX 0\nSETY 0\nFORWARD 10')))
			self.assertEqual(0, draw_line.call_count)
		self.assertAlmostEqual(0, it.turtle.x)
		self.assertAlmostEqual(10, it.turtle.y)

	def test_pen_down_draws(self):
		it = interpreter()
		with mock.patch.object(it.canvas, "draw_line", wraps=it.canvas.draw_line) as draw_line:
			it.run(parse(tokenize('SETX 0\nSETY 0\nPENDOWN\nFORWARD 10')))
			self.assertEqual(1, draw_line.call_count)
		self.assertAlmostEqual(0, it.turtle.x)
		self.assertAlmostEqual(10, it.turtle.y)
		self.assertEqual(1, len(it.canvas.segments))

	def test_directions_are_relative_to_heading(self):
		it = run('SETX 0\nSETY 0\nRIGHT 10\nBACK 4\nLEFT 3')
		self.assertAlmostEqual(7, it.turtle.x)
		self.assertAlmostEqual(-4, it.turtle.y)
		self.assertEqual(0, it.turtle.heading)
		it = run('SETX 0\nSETY 0\nSETHEADING 90\nFORWARD 5\nTURN 90\nFORWARD 2')
		self.assertAlmostEqual(5, it.turtle.x)
		self.assertAlmostEqual(-2, it.turtle.y)
		self.assertEqual(180, it.turtle.heading)

	def test_fractional_heading(self):
		it = run('SETX 0\nSETY 0\nSETHEADING 45.5\nFORWARD 10\nMAKE "h HEADING')
		self.assertEqual(Float(45.5), it.environment["h"])
		self.assertAlmostEqual(10 * math.sin(math.radians(45.5)), it.turtle.x, places=5)

	def test_queries(self):
		it = run('SETX 12\nSETY 34\nSETHEADING 56\nSETPENCOLOR 3\nMAKE "x XCOR\nMAKE "y YCOR\nMAKE "h HEADING\nMAKE "c COLOR')
		self.assertEqual([Float(12), Float(34), Float(56), Float(3)], [it.environment[k] for k in "xyhc"])

	def test_pen_color(self):
		it = run('SETPENCOLOR 7\nMAKE "c COLOR')
		self.assertEqual(Float(7.0), it.environment["c"])
		for bad in ["16", "2.5", "-1", "/ 1 0"]:
			with self.subTest(bad):
				with self.assertRaises(errors.InvalidPenColor):
					run('SETPENCOLOR ' + bad)

	def test_drawing_lands_on_the_canvas(self):
		it = run('PENDOWN\nSETPENCOLOR 4\nFORWARD 50')
		self.assertEqual(COLORS[4], it.canvas.pixel_color(200, 225))
		self.assertEqual(COLORS[0], it.canvas.pixel_color(100, 100))

	def test_drawing_off_the_canvas(self):
		with self.assertRaises(errors.DrawLineError) as cm:
			run('SETX -10\nPENDOWN\nFORWARD 5')
		self.assertEqual(3, cm.exception.line)
		self.assertIsInstance(cm.exception.cause, errors.DrawError)

	def test_enormous_move_with_the_pen_down(self):
		it = run('PENDOWN\nFORWARD 1e30')
		self.assertGreater(it.turtle.y, 1e29)
		self.assertEqual(COLORS[DEFAULT_COLOR], it.canvas.pixel_color(200, 300))
		with self.assertRaises(errors.DrawLineError) as cm:
			run('PENDOWN\nFORWARD 1e30\nFORWARD 1')
		self.assertEqual(3, cm.exception.line)

	def test_move_beyond_single_precision(self):
		with self.assertRaises(errors.DrawLineError):
			run('PENDOWN\nFORWARD * 1e30 1e30')

	def test_leaving_the_canvas_with_the_pen_up(self):
		it = run('SETX -10\nFORWARD 5\nSETX 10\nPENDOWN\nFORWARD 5')
		self.assertEqual(1, len(it.canvas.segments))


class ControlTests(unittest.TestCase):

	def test_if(self):
		it = run('MAKE "x 1\nIF EQ 1 1 [ MAKE "x 2 ]\nIF EQ 1 2 [ MAKE "x 3 ]')
		self.assertEqual(Float(2), it.environment["x"])

	def test_while_false_runs_zero_times(self):
		it = interpreter()
		with mock.patch.object(it, "visit_Move") as visit_move:
			it.run(parse(tokenize('WHILE EQ 1 2 [ FORWARD 10 ]')))
		visit_move.assert_not_called()

	def test_bounded_loop(self):
		it = run('MAKE "i 0\nWHILE LT :i 5 [\n  ADDASSIGN "i 1\n]')
		self.assertEqual(Float(5), it.environment["i"])

	def test_long_loop(self):
		it = run('MAKE "i 0\nWHILE LT :i 20000 [ ADDASSIGN "i 1 ]')
		self.assertEqual(Float(20000), it.environment["i"])

	def test_error_inside_loop_body(self):
		with self.assertRaises(errors.InvalidVariableRef) as cm:
			run('MAKE "i 0\nWHILE LT :i 3 [\n  ADDASSIGN "i 1\n  FORWARD :oops\n]')
		self.assertEqual(4, cm.exception.line)
		self.assertTrue(any("WHILE" in c for c in cm.exception.chain()))


class ProcedureTests(unittest.TestCase):

	def test_arguments_are_ordinary_variables(self):
		it = run('TO DOUBLE "n\n  MAKE "n ADD :n :n\nEND\nDOUBLE 5')
		self.assertEqual(Float(10), it.environment["n"])

	def test_arguments_overwrite_an_outer_variable(self):
		it = run('MAKE "n 5\nTO DOUBLE "n\n  MAKE "n ADD :n :n\nEND\nDOUBLE :n')
		self.assertEqual(Float(10), it.environment["n"])

	def test_definition_alone_runs_nothing(self):
		it = run('TO SETIT MAKE "x 1 END')
		self.assertNotIn("x", it.environment)

	def test_body_is_shared(self):
		ast = parse(tokenize('TO P FORWARD 1 END'))
		it = interpreter()
		it.run(ast)
		self.assertIs(ast[0].body, it.procedures["P"])

	def test_recursion(self):
		it = run('MAKE "count 0\nTO DOWN "n\n  IF GT :n 0 [\n    ADDASSIGN "count 1\n    DOWN - :n 1\n  ]\nEND\nDOWN 10')
		self.assertEqual(Float(10), it.environment["count"])
		self.assertEqual(Float(0), it.environment["n"])

	def test_redefinition_replaces_the_body(self):
		it = run('TO P MAKE "x 1 END\nTO P MAKE "x 2 END\nP')
		self.assertEqual(Float(2), it.environment["x"])

	def test_undefined_procedure(self):
		it = interpreter()
		with self.assertRaises(errors.InvalidProcedureRef):
			it.run([syntax.ProcedureCall("Q", [], 1)])

	def test_argument_errors_blame_the_call(self):
		with self.assertRaises(errors.InvalidVariableRef) as cm:
			run('TO P "a END\nPENDOWN\nP :nope')
		self.assertTrue(any("bind provided arguments" in c for c in cm.exception.chain()))


if __name__ == '__main__':
	unittest.main()
