import sys, random
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import illustration

from .errors import LogoError

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Jeepers',
		'Nuts', 'Rats', 'Shell Shock', 'Snapping Turtles',
	]

	resignations = [
		'The turtle cannot continue.',
		'The turtle has pulled into its shell.',
		'The drawing stops here.',
		'The pen is lifted for good.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Pic:
	""" One issue, ready to be shown: the chain of complaints, then the guilty source line. """
	def __init__(self, error:LogoError, path:Optional[Path], text:Optional[str]):
		self.error = error
		self._path = path
		self._text = text

	def illustrate(self) -> Optional[str]:
		row = self.error.line
		if self._text is None or row is None: return None
		lines = self._text.splitlines()
		if not 0 < row <= len(lines): return None
		single_line = lines[row-1]
		stripped = single_line.strip()
		if not stripped: return None
		col = len(single_line) - len(single_line.lstrip())
		return illustration(single_line, col, len(stripped), prefix='% 6d |' % row, caption=type(self.error).__name__)

	def as_text(self):
		lines = list(self.error.chain())
		picture = self.illustrate()
		if picture is not None:
			lines.append("")
			if self._path is not None: lines.append(str(self._path))
			lines.append(picture)
		return '\n'.join(lines)

class Report:
	""" Gathers whatever goes wrong, and says so on the console when asked. """
	_issues : list[Pic]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._path = None
		self._text = None

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list[LogoError]: return [pic.error for pic in self._issues]

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def source(self, text:str, path:Optional[Path]=None):
		""" Remember the script text, so that complaints can point into it. """
		self._text, self._path = text, path

	def issue(self, error:LogoError):
		self._issues.append(Pic(error, self._path, self._text))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def no_such_file(self, path:Path):
		self.issue(LogoError(None, "I see no file called %s" % path))

	def broken_file(self, path:Path, cause:Exception):
		self.issue(LogoError(None, "Something went pear-shaped while trying to read %s: %s" % (path, cause)))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
