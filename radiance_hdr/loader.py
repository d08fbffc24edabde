#
# Public decoding API (whole image or one scanline at a time)
#
import logging
from collections import namedtuple
import numpy as np
from .cursor import ByteCursor
from .errors import HeaderError, InvalidInputError
from .header import check_magic, parse_header
from .numba_optim import rgbe_to_rgb
from .scanline import decode_scanline

logger = logging.getLogger(__name__)

# numpy limits arrays by their size in bytes
MAX_BYTES = np.iinfo(np.intp).max
RGB_ITEMSIZE = 3 * 4 # float32[3]


def check_array_size(count, itemsize, what):
  if count > MAX_BYTES // itemsize:
    raise HeaderError(f"{what} of {count} pixels doesn't fit in memory")


Rgb = namedtuple('Rgb', ['r', 'g', 'b'])


class Image():
  # data : float32[width * height, 3] (row-major, top row first)
  def __init__(self, width, height, data):
    assert data.shape == (width * height, 3)
    self.width = width
    self.height = height
    self.data = data

  def pixel_offset(self, x, y):
    return self.width * y + x

  def pixel(self, x, y): # -> Rgb
    if not (0 <= x < self.width and 0 <= y < self.height):
      raise IndexError(f"pixel ({x}, {y}) outside of {self.width}x{self.height} image")
    return Rgb(*map(float, self.data[self.pixel_offset(x, y)]))

  def to_array(self): # -> float32[height, width, 3]
    return self.data.reshape((self.height, self.width, 3))


class Loader():
  """
  Reads the magic and the header eagerly, then decodes pixels either all at
  once (`load_image`) or row by row (`into_streaming`).

  `source` is bytes, a binary file-like object or a `ByteCursor`. Pass a
  cursor to keep reading whatever follows the image in the same stream.
  """

  def __init__(self, source):
    cursor = source if isinstance(source, ByteCursor) else ByteCursor(source)
    check_magic(cursor)
    self.width, self.height = parse_header(cursor)
    self.cursor = cursor

  def take_cursor(self):
    if self.cursor is None:
      raise RuntimeError("Loader has already handed over its stream")
    cursor, self.cursor = self.cursor, None
    return cursor

  def into_streaming(self): # -> ScanlineReader
    return ScanlineReader(self.take_cursor(), self.width, self.height)

  def load_image(self): # -> Image
    w, h = self.width, self.height
    check_array_size(w * h, RGB_ITEMSIZE, f"{w}x{h} image")

    logger.debug(f"[load_image] decoding {w}x{h}")
    data = np.zeros((w * h, 3), np.float32)
    cursor = self.take_cursor()
    if w * h != 0:
      reader = ScanlineReader(cursor, w, h)
      for y in range(h):
        reader.read_scanline(data[y * w:(y + 1) * w])
    return Image(w, h, data)


class ScanlineReader():
  """
  Decodes one scanline per `read_scanline` call into a caller-owned
  float32[>= width, 3] buffer. Iterating yields a new array per remaining row.

  After a failed read the stream position is undefined, so the reader must
  not be used again.
  """

  def __init__(self, cursor, width, height):
    self.cursor = cursor
    self.width = width
    self.height = height
    self.remaining = height
    # Rows handed out by iteration are the largest per-scanline arrays
    check_array_size(width, RGB_ITEMSIZE, "scanline")
    self.rgbe = np.empty((width, 4), np.uint8) # uint8[w, 4] reused per scanline

  def read_scanline(self, buffer): # float32[>= w, 3]
    if not (isinstance(buffer, np.ndarray) and buffer.dtype == np.float32 and
            buffer.ndim == 2 and buffer.shape[1] == 3):
      raise InvalidInputError("scanline buffer must be float32[n, 3]")
    if len(buffer) < self.width:
      raise InvalidInputError(
          f"image width {self.width} exceeds length of provided buffer {len(buffer)}")

    decode_scanline(self.cursor, self.rgbe)
    rgbe_to_rgb(self.rgbe, buffer[:self.width])
    if self.remaining > 0:
      self.remaining -= 1

  def __iter__(self):
    while self.remaining > 0:
      buffer = np.empty((self.width, 3), np.float32)
      try:
        self.read_scanline(buffer)
      except Exception:
        self.remaining = 0
        raise
      yield buffer


def load(source): # -> Image
  return Loader(source).load_image()
