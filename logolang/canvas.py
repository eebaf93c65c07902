"""
The drawing surface the turtle leaves its trail upon.

Lines are rasterized onto a PyGame Surface, which never needs a display,
and are also remembered so the drawing can be written out as SVG.

Turtle coordinates have y growing upward and heading 0 pointing up the page,
with headings turning clockwise. Only the rasterizer cares that screens count rows downward.
"""
import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import math
from pathlib import Path
from typing import NamedTuple
import pygame
from pygame import draw

from .errors import DrawError, ImgFileError, UnsupportedFileExtension

# The sixteen pen colors, as numbered in classic Logo.
COLORS = [
	(0, 0, 0),        # black
	(0, 0, 255),      # blue
	(0, 255, 0),      # lime
	(0, 255, 255),    # cyan
	(255, 0, 0),      # red
	(255, 0, 255),    # magenta
	(255, 255, 0),    # yellow
	(255, 255, 255),  # white
	(165, 42, 42),    # brown
	(210, 180, 140),  # tan
	(34, 139, 34),    # forest
	(127, 255, 212),  # aqua
	(250, 128, 114),  # salmon
	(128, 0, 128),    # purple
	(255, 165, 0),    # orange
	(128, 128, 128),  # grey
]

BACKGROUND = COLORS[0]

RASTER_FORMATS = frozenset([".png", ".bmp", ".tga", ".jpg", ".jpeg"])

def end_coordinates(x:float, y:float, heading:float, distance:float) -> tuple[float, float]:
	""" Where the turtle ends up, without drawing anything. """
	radians = math.radians(heading)
	return x + distance * math.sin(radians), y + distance * math.cos(radians)

class Segment(NamedTuple):
	start: tuple[float, float]
	stop: tuple[float, float]
	color: int

class Canvas:
	def __init__(self, width:int, height:int):
		if width <= 0 or height <= 0:
			raise DrawError(None, "A canvas of %d by %d pixels has nothing to draw on." % (width, height))
		self.width, self.height = width, height
		self.segments = []
		self._surface = pygame.Surface((width, height))
		self._surface.fill(BACKGROUND)

	def contains(self, x:float, y:float) -> bool:
		return 0 <= x <= self.width and 0 <= y <= self.height

	def _pixel(self, x:float, y:float) -> tuple[int, int]:
		return round(x), round(self.height - y)

	def draw_line(self, x:float, y:float, heading:float, distance:float, color:int) -> tuple[float, float]:
		if not self.contains(x, y):
			raise DrawError(None, "the line starts at (%g, %g), outside the %dx%d image" % (x, y, self.width, self.height))
		if not 0 <= color < len(COLORS):
			raise DrawError(None, "there is no pen color %r" % color)
		stop = end_coordinates(x, y, heading, distance)
		if not all(map(math.isfinite, stop)):
			raise DrawError(None, "the line does not end anywhere finite")
		# Past this reach, a line from inside the image is off the image anyway.
		reach = self.width + self.height
		visible = end_coordinates(x, y, heading, max(-reach, min(reach, distance)))
		draw.line(self._surface, COLORS[color], self._pixel(x, y), self._pixel(*visible))
		self.segments.append(Segment((x, y), visible, color))
		return stop

	def pixel_color(self, x:float, y:float) -> tuple[int, int, int]:
		""" What color ended up at turtle coordinates (x, y)? Mainly for tests. """
		return tuple(self._surface.get_at(self._pixel(x, y)))[:3]

	def save(self, path):
		path = Path(path)
		suffix = path.suffix.lower()
		if suffix == ".svg":
			path.write_text(self.as_svg(), encoding="utf-8")
		elif suffix in RASTER_FORMATS:
			try: pygame.image.save(self._surface, str(path))
			except (pygame.error, OSError) as ex: raise ImgFileError(None, "Could not save %s: %s" % (path, ex)) from ex
		else:
			raise UnsupportedFileExtension(path)

	def as_svg(self) -> str:
		lines = [
			'<svg xmlns="http://www.w3.org/2000/svg" width="%d" height="%d" viewBox="0 0 %d %d">' % (self.width, self.height, self.width, self.height),
			'<rect width="100%%" height="100%%" fill="%s"/>' % _hex(BACKGROUND),
		]
		for seg in self.segments:
			(x1, y1), (x2, y2) = seg.start, seg.stop
			lines.append('<path d="M %g %g L %g %g" stroke="%s" fill="none" stroke-width="1"/>' % (
				x1, self.height - y1, x2, self.height - y2, _hex(COLORS[seg.color])
			))
		lines.append('</svg>')
		return '\n'.join(lines) + '\n'

def _hex(rgb) -> str:
	return "#%02x%02x%02x" % rgb
