#
# Build Radiance HDR byte strings for tests
#
import numpy as np


def make_header(w, h, lines=('FORMAT=32-bit_rle_rgbe',)): # -> bytes
  header = "#?RADIANCE\n"
  for line in lines:
    header += line + "\n"
  header += f"\n-Y {h} +X {w}\n"
  return bytes(header, 'ascii')


def encode_plane(values): # uint8[w] -> bytes
  out = bytearray()
  w = len(values)
  i = 0
  while i < w:
    # run of identical bytes
    j = i
    while j < w and j - i < 127 and values[j] == values[i]:
      j += 1
    if j - i >= 3:
      out += bytes([128 + (j - i), values[i]])
      i = j
      continue

    # literal until next run (or 128 bytes)
    j = i
    while j < w and j - i < 128:
      if j + 2 < w and values[j] == values[j + 1] == values[j + 2]:
        break
      j += 1
    out += bytes([j - i]) + bytes(values[i:j])
    i = j
  return bytes(out)


def write_new_rle(data): # uint8[w, 4] -> bytes
  w = len(data)
  out = bytes([2, 2, w >> 8, w & 0xff])
  for c in range(4):
    out += encode_plane(data[:, c].tolist())
  return out


def write_old_rle(data): # uint8[w, 4] -> bytes
  out = bytearray()
  w = len(data)
  i = 0
  while i < w:
    out += bytes(data[i].tolist())
    j = i + 1
    while j < w and np.array_equal(data[j], data[i]):
      j += 1
    count = j - i - 1
    # markers chain little-endian bytes of the repeat count
    while count > 0:
      out += bytes([1, 1, 1, count & 0xff])
      count >>= 8
    i = j
  return bytes(out)


def make_hdr(data, encoder=write_new_rle, lines=('FORMAT=32-bit_rle_rgbe',)): # uint8[h, w, 4] -> bytes
  h, w = data.shape[:2]
  out = make_header(w, h, lines)
  for y in range(h):
    out += encoder(data[y])
  return out


def random_rgbe(w, h, seed=0): # -> uint8[h, w, 4]
  # Keep mantissas clear of the RLE markers and exponents in the normal float32 range
  rng = np.random.default_rng(seed)
  rgbe = np.empty((h, w, 4), np.uint8)
  rgbe[..., :3] = rng.integers(3, 256, size=(h, w, 3))
  rgbe[..., 3] = rng.integers(100, 160, size=(h, w))
  # Some repeated pixels so both encoders produce runs
  rgbe[:, w // 2:] = rgbe[:, w // 2:w // 2 + 1]
  return rgbe


def reference_rgb(rgbe): # uint8[.., 4] -> float64[.., 3]
  rgb = rgbe[..., :3].astype(np.float64)
  e = rgbe[..., 3:].astype(np.float64)
  return rgb * 2.0 ** (e - 128) / 255.0
