#
# Error kinds raised while decoding
#


class LoadError(Exception):
  kind = None


# Underlying source failed (original OSError is chained as __cause__)
class ReadError(LoadError):
  kind = 'io'


class UnexpectedEofError(LoadError, EOFError):
  kind = 'eof'


# Magic signature mismatch
class FileFormatError(LoadError):
  kind = 'file_format'


# Resolution line violates "-Y <height> +X <width>" (including overflow)
class HeaderError(LoadError):
  kind = 'header'


# Run-length structure doesn't fit the scanline
class RleError(LoadError):
  kind = 'rle'


# Caller supplied a scanline buffer that can't hold one row
class InvalidInputError(LoadError, ValueError):
  kind = 'invalid_input'
