"""
This is an interpreter for a small Logo dialect that draws turtle graphics.

{0}

For example:

    logolang examples/spiral.lg spiral.png 400 400

will run spiral.lg on a 400x400 canvas and save the picture as spiral.png,
or else try to explain why not. The image's extension picks the format:
.svg, .png, .bmp, .tga, or .jpg.

    logolang -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="logolang",
	description="Interpreter for a Logo dialect with turtle graphics.",
)
parser.add_argument("program", help="try examples/spiral.lg for example.")
parser.add_argument("image", help="where to save the drawing (.svg, .png, .bmp, .tga, or .jpg)")
parser.add_argument("height", type=int, help="canvas height in pixels")
parser.add_argument("width", type=int, help="canvas width in pixels")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually draw anything.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on.")

def run(args):
	from .diagnostics import Report
	from .front_end import parse_file
	report = Report(verbose=args.verbose)
	ast = parse_file(Path(args.program), report)
	if report.sick():
		report.complain_to_console()
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	from .executive import run_program, save_drawing
	interpreter = run_program(ast, args.width, args.height, report)
	if interpreter is None or not save_drawing(interpreter.canvas, Path(args.image), report):
		report.complain_to_console()
		return 1
	return 0

def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	if argv:
		sys.exit(run(parser.parse_args(argv)))
	else:
		print(__doc__.strip().format(parser.format_usage()))
