"""
Run a parsed program against a fresh canvas, and save the picture.
"""
from pathlib import Path
from typing import Optional, Sequence

from .canvas import Canvas
from .diagnostics import Report
from .errors import InterpreterError, DrawError, ImgFileError
from .interpreter import Interpreter
from . import syntax

def run_program(ast:Sequence[syntax.Node], width:int, height:int, report:Report) -> Optional[Interpreter]:
	try:
		interpreter = Interpreter(Canvas(width, height))
		report.info("Drawing on a %dx%d canvas" % (width, height))
		interpreter.run(ast)
	except (InterpreterError, DrawError) as ex:
		report.issue(ex)
	else:
		report.info("Finished at", interpreter.turtle)
		return interpreter

def save_drawing(canvas:Canvas, path:Path, report:Report) -> bool:
	try:
		canvas.save(path)
	except ImgFileError as ex:
		report.issue(ex)
	except OSError as ex:
		report.broken_file(path, ex)
	else:
		report.info("Saved", len(canvas.segments), "line segments to", path)
		return True
	return False
