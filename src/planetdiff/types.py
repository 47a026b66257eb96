import typing as t

import numpy as np
import numpy.typing as npt

PlanetArray = npt.NDArray[np.floating]
PlanetArrayInt = npt.NDArray[np.integer]
PlanetDType = t.Union[type[np.float32], type[np.float64], np.dtype]
