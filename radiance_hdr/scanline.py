#
# Scanline decompression ("new" per-channel RLE and "old" whole-pixel RLE)
#
import numpy as np
from .errors import RleError, UnexpectedEofError

# New format is only trusted for widths it can encode
MIN_LEN = 8
MAX_LEN = 0x7fff


def is_new_rle_marker(r, g, b, e):
  return r == 2 and g == 2 and (b & 0x80) == 0


def is_old_rle_marker(r, g, b, e):
  return r == 1 and g == 1 and b == 1


def decode_scanline(cursor, rgbe_out): # uint8[w, 4]
  w = len(rgbe_out)
  if w == 0:
    return

  rgbe = cursor.read_exact(4)
  if MIN_LEN <= w <= MAX_LEN and is_new_rle_marker(*rgbe):
    # Remaining bits repeat the scanline width, which isn't needed here
    new_decrunch(cursor, rgbe_out)
  else:
    old_decrunch(cursor, rgbe, rgbe_out)


def new_decrunch(cursor, rgbe_out): # uint8[w, 4]
  w = len(rgbe_out)

  # process 4 components
  for c in range(4):
    i = 0
    while i < w:
      code = cursor.read_byte()
      if code > 128:
        count = code & 127
        run = cursor.read_byte()
        if i + count > w:
          raise RleError(f"Run of {count} at {i} overflows scanline of {w}")
        rgbe_out[i:i+count, c] = run
        i += count
      else:
        count = code
        if i + count > w:
          raise RleError(f"Literal of {count} at {i} overflows scanline of {w}")
        # Copy straight out of the cursor's buffer
        while count > 0:
          buf = cursor.fill_buf()
          if len(buf) == 0:
            raise UnexpectedEofError(f"Scanline ended with {count} literal bytes missing")
          n = min(count, len(buf))
          rgbe_out[i:i+n, c] = np.frombuffer(buf[:n], np.uint8)
          cursor.consume(n)
          i += n
          count -= n


def old_decrunch(cursor, first, rgbe_out): # bytes[4], uint8[w, 4]
  w = len(rgbe_out)
  if is_old_rle_marker(*first):
    raise RleError("Repeat marker before any pixel")
  rgbe_out[0] = tuple(first)

  i = 1
  shift = 0
  while i < w:
    rgbe = cursor.read_exact(4)
    if is_old_rle_marker(*rgbe):
      # Consecutive markers build up longer counts
      count = rgbe[3] << shift
      if i + count > w:
        raise RleError(f"Repeat of {count} at {i} overflows scanline of {w}")
      rgbe_out[i:i+count] = rgbe_out[i - 1]
      i += count
      shift += 8
    else:
      rgbe_out[i] = tuple(rgbe)
      i += 1
      shift = 0
