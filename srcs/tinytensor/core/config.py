import numpy as np

# Element type used by zeros()/ones() when no dtype is given
DEFAULT_DTYPE = np.float32

# Reshape axis whose extent is inferred from the element count
WILDCARD = 0
