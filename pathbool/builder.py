"""This submodule contains PathListBuilder, which builds PathLists from
drawing commands (move, line, cubic, quadratic, elliptical arc and close),
and a couple of shape constructors built on top of it."""

# External dependencies
from math import sin, cos, tan, sqrt, acos, ceil, pi, radians
import numpy as np

# Internal dependencies
from .path import Path, Line, CubicBezier, quadratic_bezier, transform
from .pathlist import PathList
from .misctools import ContractError, clamp

# Default Parameters ##########################################################

TAU = 2*pi

# arcs are approximated by one cubic per span of at most this angle
ARC_MAX_SPAN = TAU/3

# control point distance (in radii) of the four cubics approximating a
# circle
CIRCLE_KAPPA = 0.55232


# Elliptical Arcs #############################################################

def _map_to_ellipse(z, rx, ry, cosphi, sinphi, center):
    x, y = z.real*rx, z.imag*ry
    return center + complex(cosphi*x - sinphi*y, sinphi*x + cosphi*y)


def _unit_arc(ang1, ang2):
    """returns the control points, after the start point, of the cubic
    approximating the unit circle arc from ang1 spanning ang2."""
    a = 4/3*tan(ang2/4)
    x1, y1 = cos(ang1), sin(ang1)
    x2, y2 = cos(ang1 + ang2), sin(ang1 + ang2)
    return (complex(x1 - y1*a, y1 + x1*a),
            complex(x2 + y2*a, y2 - x2*a),
            complex(x2, y2))


def _vector_angle(u, v):
    sign = -1 if u.real*v.imag - u.imag*v.real < 0 else 1
    dot = clamp(u.real*v.real + u.imag*v.imag, -1, 1)
    return sign*acos(dot)


def arc_to_cubics(start, radius, rotation, large_arc, sweep, end):
    """Converts the SVG endpoint parameterized elliptical arc to cubics.

    Args:
        start, end: end points of the arc (complex)
        radius: rx + 1j*ry, or a real number for circular arcs
        rotation: rotation of the ellipse's x axis, in degrees
        large_arc, sweep: the SVG arc flags

    Returns:
        a list of 1 to 3 tuples (control1, control2, end); an empty list if
        the arc degenerates to nothing.  A line is drawn instead by
        PathListBuilder.arc_to() when a radius is zero."""
    if isinstance(radius, complex):
        rx, ry = abs(radius.real), abs(radius.imag)
    else:
        rx = ry = abs(radius)
    if rx == 0 or ry == 0:
        return []

    sinphi = sin(radians(rotation))
    cosphi = cos(radians(rotation))

    half = (start - end)/2
    pxp = cosphi*half.real + sinphi*half.imag
    pyp = -sinphi*half.real + cosphi*half.imag
    if pxp == 0 and pyp == 0:
        return []

    # scale up radii too small to reach the end point
    lamb = pxp**2/rx**2 + pyp**2/ry**2
    if lamb > 1:
        rx *= sqrt(lamb)
        ry *= sqrt(lamb)

    rxsq, rysq = rx*rx, ry*ry
    pxpsq, pypsq = pxp*pxp, pyp*pyp
    radicant = max(0, rxsq*rysq - rxsq*pypsq - rysq*pxpsq)
    radicant /= rxsq*pypsq + rysq*pxpsq
    radicant = sqrt(radicant)*(-1 if bool(large_arc) == bool(sweep) else 1)

    centerxp = radicant*rx/ry*pyp
    centeryp = radicant*-ry/rx*pxp
    mid = (start + end)/2
    center = mid + complex(cosphi*centerxp - sinphi*centeryp,
                           sinphi*centerxp + cosphi*centeryp)

    v1 = complex((pxp - centerxp)/rx, (pyp - centeryp)/ry)
    v2 = complex((-pxp - centerxp)/rx, (-pyp - centeryp)/ry)
    ang1 = _vector_angle(1, v1)
    ang2 = _vector_angle(v1, v2)
    if not sweep and ang2 > 0:
        ang2 -= TAU
    if sweep and ang2 < 0:
        ang2 += TAU

    # a ratio of 1.0000000001 would cause a needless extra split
    ratio = abs(ang2)/ARC_MAX_SPAN
    if abs(1.0 - ratio) < 1e-7:
        ratio = 1.0
    spans = max(int(ceil(ratio)), 1)
    ang2 /= spans

    cubics = []
    for _ in range(spans):
        cubics.append(tuple(
            _map_to_ellipse(z, rx, ry, cosphi, sinphi, center)
            for z in _unit_arc(ang1, ang2)))
        ang1 += ang2

    # land exactly on the requested end point
    c1, c2, _ = cubics[-1]
    cubics[-1] = (c1, c2, end)
    return cubics


# Builder #####################################################################

class PathListBuilder(object):
    """Collects drawing commands into a PathList.

    Every point is given in user space and passed through the matrix
    installed with with_transform() (a 3x3 homogeneous numpy array) before
    it is stored.

    >>> b = PathListBuilder()
    >>> b.move_to(0j); b.line_to(10); b.line_to(10+10j); b.close()
    >>> b.get_paths().d()
    'M 0,0 L 10,0 L 10,10 L 0,0'
    """

    def __init__(self):
        self._subpaths = []
        self._start = None
        self._current = None
        self._closed = False
        self._transform = np.eye(3)

    def with_transform(self, matrix):
        """installs `matrix` for all points given from now on; returns the
        builder so calls can be chained."""
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != (3, 3):
            raise ValueError("Expected a 3x3 matrix, got shape "
                             "{}.".format(matrix.shape))
        self._transform = matrix
        return self

    def _add(self, seg):
        if self._current is None:
            raise ContractError("Drawing commands need a preceding "
                                "move_to().")
        if self._closed:
            # drawing after close() starts a new subpath at the old start
            self._subpaths.append([])
            self._closed = False
        self._subpaths[-1].append(transform(seg, self._transform))
        self._current = seg.end

    def move_to(self, pt):
        self._subpaths.append([])
        self._start = self._current = pt
        self._closed = False

    def line_to(self, pt):
        self._add(Line(self._current, pt))

    def cubic_to(self, control1, control2, end):
        self._add(CubicBezier(self._current, control1, control2, end))

    def quad_to(self, control, end):
        self._add(quadratic_bezier(self._current, control, end))

    def arc_to(self, radius, rotation, large_arc, sweep, end):
        """Adds an SVG style elliptical arc, approximated by 1 to 3 cubics.
        Arcs with a zero radius become a line."""
        if self._current is None:
            raise ContractError("Drawing commands need a preceding "
                                "move_to().")
        if self._current == end:
            return
        cubics = arc_to_cubics(self._current, radius, rotation, large_arc,
                               sweep, end)
        if not cubics:
            self.line_to(end)
            return
        for control1, control2, pt in cubics:
            self.cubic_to(control1, control2, pt)

    def close(self):
        """Closes the current subpath, adding a line back to its start only
        when the current point is elsewhere."""
        if self._current is None:
            raise ContractError("close() needs a preceding move_to().")
        if self._current != self._start:
            self.line_to(self._start)
        self._current = self._start
        self._closed = True

    def get_paths(self):
        """returns the PathList drawn so far (empty subpaths skipped)."""
        return PathList(*[Path(*segs) for segs in self._subpaths if segs])


def rect_path_list(xmin, ymin, xmax, ymax):
    """returns the clockwise rectangle with the given corners."""
    b = PathListBuilder()
    b.move_to(complex(xmin, ymin))
    b.line_to(complex(xmax, ymin))
    b.line_to(complex(xmax, ymax))
    b.line_to(complex(xmin, ymax))
    b.close()
    return b.get_paths()


def circle_path_list(center, radius):
    """returns a clockwise circle made of four cubics, starting at the top."""
    k = CIRCLE_KAPPA*radius
    top = center - 1j*radius
    right = center + radius
    bottom = center + 1j*radius
    left = center - radius
    b = PathListBuilder()
    b.move_to(top)
    b.cubic_to(top + k, right - 1j*k, right)
    b.cubic_to(right + 1j*k, bottom + k, bottom)
    b.cubic_to(bottom - k, left + 1j*k, left)
    b.cubic_to(left - 1j*k, top - k, top)
    return b.get_paths()
