import numpy as np
import numba


@numba.njit(cache=True)
def rgbe_to_rgb(rgbe, rgb_out): # uint8[w, 4], float32[w, 3]
  for i in range(rgbe.shape[0]):
    # Single precision throughout so that every decode path rounds identically
    d = np.float32(2.0 ** (np.int64(rgbe[i, 3]) - 128)) / np.float32(255.0)
    rgb_out[i, 0] = np.float32(rgbe[i, 0]) * d
    rgb_out[i, 1] = np.float32(rgbe[i, 1]) * d
    rgb_out[i, 2] = np.float32(rgbe[i, 2]) * d
