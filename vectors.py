import numpy as np

"""
Vector helpers shared by the ray tracer.  Points, directions and colors are all
NumPy float64 arrays of shape (3,).  Arrays made by `vec` are read-only, and every
function here returns a fresh array, so a vector never changes after it is built.
"""


def vec(list):
    """Handy shorthand to make a read-only double-precision 3-vector."""
    v = np.array(list, dtype=np.float64)
    assert v.shape == (3,), "expected three components"
    v.flags.writeable = False
    return v

def dot(a, b):
    """Return the dot product of vectors a and b."""
    return float(np.dot(a, b))

def add(a, b):
    return vec(a + b)

def subtract(a, b):
    return vec(a - b)

def multiply(v, scalar):
    """Scale v by a scalar."""
    return vec(v * scalar)

def divide(v, scalar):
    """Divide v by a scalar.

    Dividing by zero yields inf/nan components (NumPy semantics), so callers must
    never pass a zero scalar if they need a finite result.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return vec(v / scalar)

def length(v):
    """Return the Euclidean length of v."""
    return float(np.sqrt(np.dot(v, v)))

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    v must have non-zero length.
    """
    return divide(v, length(v))
