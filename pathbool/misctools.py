"""This submodule contains miscellaneous tools that are used internally:
tolerance helpers, number formatting and the exceptions raised by
pathbool."""


# Default Parameters ##########################################################

# fixed epsilon used for scalar near-zero/near-equal comparisons
EPSILON = 1e-4

# per-coordinate tolerance used when comparing points
POINT_EPSILON = 0.01

# number of decimals kept when serializing coordinates
D_STRING_DECIMALS = 4


# Exceptions ##################################################################

class PathboolError(Exception):
    """Base class for all errors raised by pathbool."""


class InvariantError(PathboolError):
    """An internal consistency check failed.

    This is never recoverable: continuing would produce geometrically wrong
    output, so the whole operation is abandoned."""


class ContainmentCycleError(InvariantError):
    """Contour containment could not be ordered into a tree."""


class ContractError(PathboolError, ValueError):
    """The caller violated a precondition of the operation."""


# Comparisons #################################################################

def is_same(a, b, epsilon=EPSILON):
    """Fixed-epsilon equality of two real numbers."""
    return abs(a - b) < epsilon


def points_equal(z1, z2, epsilon=POINT_EPSILON):
    """Checks that two points agree in both coordinates up to `epsilon`."""
    return (abs(z1.real - z2.real) < epsilon and
            abs(z1.imag - z2.imag) < epsilon)


def clamp(x, lo, hi):
    return max(lo, min(hi, x))


# Formatting ##################################################################

def format_number(x, decimals=D_STRING_DECIMALS):
    """Rounds `x` and formats it compactly, e.g. 100.0 -> '100',
    8.888888 -> '8.8889' and -0.0 -> '0'."""
    r = round(float(x), decimals)
    if r == int(r):
        return str(int(r))
    return repr(r)


def format_point(z, decimals=D_STRING_DECIMALS):
    return '{},{}'.format(format_number(z.real, decimals),
                          format_number(z.imag, decimals))
