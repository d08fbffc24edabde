from .cursor import ByteCursor, DEFAULT_CHUNK_SIZE
from .errors import (
  LoadError, ReadError, UnexpectedEofError, FileFormatError, HeaderError,
  RleError, InvalidInputError)
from .header import MAGIC
from .loader import Rgb, Image, Loader, ScanlineReader, load
