from pathlib import Path
from contextlib import redirect_stderr, redirect_stdout
import io
import tempfile
import unittest

from logolang import diagnostics, cmdline
from logolang.front_end import parse_file
from logolang.executive import run_program, save_drawing

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_ok = base_folder/"zoo/ok"


def _good(folder, which, size=400):
	report = diagnostics.Report(verbose=0)
	ast = parse_file(folder / (which + ".lg"), report)
	report.assert_no_issues("Ostensibly-good example failed to parse.")
	interpreter = run_program(ast, size, size, report)
	report.assert_no_issues("Ostensibly-good example failed to run.")
	return interpreter

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def test_examples_draw_something(self):
		for name in ["square", "spiral", "procedures", "star"]:
			with self.subTest(name):
				interpreter = _good(examples, name)
				self.assertTrue(interpreter.canvas.segments)

	def test_zoo_of_ok(self):
		for name in ["recursion", "words"]:
			with self.subTest(name):
				_good(zoo_ok, name)

	def test_recursion_shares_one_namespace(self):
		interpreter = _good(zoo_ok, "recursion")
		self.assertEqual(0, interpreter.environment["n"].value)
		self.assertEqual(4, len(interpreter.canvas.segments))

	def test_save_both_ways(self):
		interpreter = _good(examples, "square")
		report = diagnostics.Report()
		with tempfile.TemporaryDirectory() as tmp:
			for name in ["square.svg", "square.png"]:
				with self.subTest(name):
					path = Path(tmp) / name
					self.assertTrue(save_drawing(interpreter.canvas, path, report))
					self.assertTrue(path.stat().st_size)
			self.assertFalse(save_drawing(interpreter.canvas, Path(tmp) / "square.gif", report))
		self.assertTrue(report.sick())


class CommandLineTests(unittest.TestCase):

	def invoke(self, *argv):
		stderr = io.StringIO()
		with redirect_stderr(stderr):
			status = cmdline.run(cmdline.parser.parse_args(list(argv)))
		return status, stderr.getvalue()

	def test_draws_a_picture(self):
		with tempfile.TemporaryDirectory() as tmp:
			image = Path(tmp) / "spiral.png"
			status, _ = self.invoke(str(examples / "spiral.lg"), str(image), "400", "400")
			self.assertEqual(0, status)
			self.assertTrue(image.exists())

	def test_check_only(self):
		with tempfile.TemporaryDirectory() as tmp:
			image = Path(tmp) / "star.svg"
			status, said = self.invoke("--check", str(examples / "star.lg"), str(image), "400", "400")
			self.assertEqual(0, status)
			self.assertFalse(image.exists())
			self.assertIn("plausible", said)

	def test_broken_program(self):
		with tempfile.TemporaryDirectory() as tmp:
			status, said = self.invoke(str(base_folder / "zoo/fail/run/pen_color_range.lg"), str(Path(tmp) / "x.png"), "400", "400")
		self.assertEqual(1, status)
		self.assertIn("16", said)

	def test_missing_program(self):
		status, said = self.invoke(str(examples / "no_such_file.lg"), "x.png", "400", "400")
		self.assertEqual(1, status)
		self.assertIn("no_such_file.lg", said)

	def test_no_arguments_explains_itself(self):
		stdout = io.StringIO()
		with redirect_stdout(stdout):
			cmdline.main([])
		self.assertIn("usage:", stdout.getvalue())
		self.assertIn("logolang", stdout.getvalue())


if __name__ == '__main__':
	unittest.main()
