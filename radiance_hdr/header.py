#
# Magic signature and resolution line
#
import logging, sys
from .errors import FileFormatError, HeaderError

logger = logging.getLogger(__name__)

MAGIC = b'#?RADIANCE'
EOL = 0x0a
SPACE = 0x20
DIGIT_0 = 0x30
DIGIT_9 = 0x39

# Largest value usable as an index or dimension
MAX_SIZE = sys.maxsize


def check_magic(cursor):
  magic = cursor.read_exact(len(MAGIC))
  if magic != MAGIC:
    raise FileFormatError(f"Expected {MAGIC!r} but got {magic!r}")


def skip_paragraph(cursor):
  # Header lines (FORMAT=..., EXPOSURE=..., comments) end with a blank line
  prev_eol = False
  while True:
    is_eol = cursor.read_byte() == EOL
    if prev_eol and is_eol:
      return
    prev_eol = is_eol


def parse_header(cursor): # -> (width, height)
  skip_paragraph(cursor)
  w, h = DimParser(cursor).parse()
  logger.debug(f"[parse_header] width = {w}, height = {h}")
  return w, h


class DimParser():
  """
  Recursive-descent parser for the resolution line

    <spaces>? "-Y" <spaces> <height> <spaces> "+X" <spaces> <width> <spaces>? "\\n"

  `byte` always holds the current (already read) byte. After `parse` the
  cursor sits right after the line terminator.
  """

  def __init__(self, cursor):
    self.cursor = cursor
    self.byte = cursor.read_byte()

  def parse(self): # -> (width, height)
    self.eat_spaces()
    y = self.expect_y()
    self.expect_spaces()
    x = self.expect_x()
    self.eat_spaces()
    self.expect_eol()
    return x, y

  def eat(self):
    self.byte = self.cursor.read_byte()
    return self.byte

  def eat_spaces(self): # -> bool
    ate_any = False
    while self.byte == SPACE:
      ate_any = True
      self.eat()
    return ate_any

  def expect_spaces(self):
    if not self.eat_spaces():
      raise HeaderError(f"Expected ' ' but got {bytes([self.byte])!r}")

  def expect(self, token):
    for b in token:
      if self.byte != b:
        raise HeaderError(f"Expected {token!r} but got {bytes([self.byte])!r}")
      self.eat()

  def expect_y(self):
    self.expect(b'-Y')
    self.expect_spaces()
    return self.expect_uint()

  def expect_x(self):
    self.expect(b'+X')
    self.expect_spaces()
    return self.expect_uint()

  def expect_uint(self):
    if not (DIGIT_0 <= self.byte <= DIGIT_9):
      raise HeaderError(f"Expected digit but got {bytes([self.byte])!r}")
    value = 0
    while DIGIT_0 <= self.byte <= DIGIT_9:
      digit = self.byte - DIGIT_0
      if value > (MAX_SIZE - digit) // 10:
        raise HeaderError("Resolution doesn't fit in an index")
      value = value * 10 + digit
      self.eat()
    return value

  def expect_eol(self):
    # The terminator is the last byte this parser reads
    if self.byte != EOL:
      raise HeaderError(f"Expected '\\n' but got {bytes([self.byte])!r}")
