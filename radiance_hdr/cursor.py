#
# Buffered forward-only byte source
#
from .errors import ReadError, UnexpectedEofError

DEFAULT_CHUNK_SIZE = 64 * 1024


class ByteCursor():
  """
  Pull-based reader over either a bytes-like object or a binary file-like
  object (anything with `read(n)`).

    - fill_buf()   : peek at the buffered bytes (refills when empty, b'' at end)
    - consume(n)   : drop n bytes obtained from fill_buf
    - read_exact(n): exactly n bytes or UnexpectedEofError

  Bytes read from a file-like source are kept in the cursor's own buffer,
  so decoding several images back-to-back from one stream has to reuse the
  same cursor.
  """

  def __init__(self, source, chunk_size=DEFAULT_CHUNK_SIZE):
    assert chunk_size > 0
    self.chunk_size = chunk_size
    if isinstance(source, (bytes, bytearray, memoryview)):
      self.source = None
      self.buf = bytes(source)
    else:
      self.source = source
      self.buf = b''
    self.pos = 0

  def fill_buf(self): # -> memoryview
    if self.pos >= len(self.buf) and self.source is not None:
      try:
        chunk = self.source.read(self.chunk_size)
      except OSError as e:
        raise ReadError(f"failed to read from source: {e}") from e
      self.buf = bytes(chunk or b'')
      self.pos = 0
      if len(self.buf) == 0:
        # Don't keep polling an exhausted source
        self.source = None
    return memoryview(self.buf)[self.pos:]

  def consume(self, n):
    if n < 0 or self.pos + n > len(self.buf):
      raise ValueError(f"cannot consume {n} bytes ({len(self.buf) - self.pos} buffered)")
    self.pos += n

  def read_exact(self, n): # -> bytes
    # Fast path: everything is already buffered
    if self.pos + n <= len(self.buf):
      result = self.buf[self.pos:self.pos + n]
      self.pos += n
      return result

    parts = []
    left = n
    while left > 0:
      chunk = self.fill_buf()
      if len(chunk) == 0:
        raise UnexpectedEofError(f"expected {n} bytes but got {n - left}")
      count = min(left, len(chunk))
      parts.append(bytes(chunk[:count]))
      self.consume(count)
      left -= count
    return b''.join(parts)

  def read_byte(self): # -> int
    if self.pos < len(self.buf):
      b = self.buf[self.pos]
      self.pos += 1
      return b
    chunk = self.fill_buf()
    if len(chunk) == 0:
      raise UnexpectedEofError("expected 1 byte but got 0")
    self.pos += 1
    return chunk[0]
