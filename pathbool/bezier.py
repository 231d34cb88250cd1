"""This submodule contains tools that deal with cubic (and lower order)
Bezier curves.
Note:  Bezier curves here are always represented by the tuple of their control
points given by their standard representation, e.g. (start, control1,
control2, end) for a cubic and (start, end) for a line."""

# External dependencies:
from math import ceil
import numpy as np
from scipy.integrate import fixed_quad

# Internal dependencies
from .misctools import is_same, points_equal, clamp, POINT_EPSILON
from .polytools import quadratic_roots, cubic_roots, roots01
from .vector import dot, cross, square_distance


# Default Parameters ##########################################################

# number of Gauss-Legendre nodes used by bezier_length()
GAUSS_LEGENDRE_ORDER = 25

# bezier_t_at_length() samples about length/2 points, but never fewer
T_AT_LENGTH_MIN_SAMPLES = 10

# bezier_intersections() stops subdividing below this box size and merges
# solutions closer than sqrt(INTERSECTION_MERGE_SQDIST)
INTERSECTION_THRESHOLD = 0.1
INTERSECTION_MERGE_SQDIST = 2

# bezier_project_point() parameters
PROJECTION_SAMPLES = 25
PROJECTION_PROBES = 5
PROJECTION_TOLERANCE = 0.001
PROJECTION_MAXITS = 100

# slack on the perpendicular axis when checking that a curve/line
# intersection lies within the line's bounding box
LINE_BOX_TOLERANCE = 0.001


# Evaluation ##################################################################

def bezier_point(p, t):
    """Evaluates the Bezier curve given by it's control points, p, at t.
    Note: Uses Horner's rule.  Works elementwise if t is a numpy array."""
    deg = len(p) - 1
    if deg == 3:
        return p[0] + t*(
            3*(p[1] - p[0]) + t*(
                3*(p[0] + p[2]) - 6*p[1] + t*(
                    -p[0] + 3*(p[1] - p[2]) + p[3])))
    elif deg == 2:
        return p[0] + t*(
            2*(p[1] - p[0]) + t*(
                p[0] - 2*p[1] + p[2]))
    elif deg == 1:
        return p[0] + t*(p[1] - p[0])
    elif deg == 0:
        return p[0]
    raise ValueError("Only Bezier curves up to degree 3 are supported.")


def bezier_derivative(p, t):
    """Evaluates the hodograph (first derivative) of a cubic at t."""
    if len(p) == 2:
        return p[1] - p[0]
    mt = 1 - t
    return (3*(p[1] - p[0])*mt*mt + 6*(p[2] - p[1])*mt*t +
            3*(p[3] - p[2])*t*t)


def bezier2polynomial(p):
    """Converts a tuple of Bezier control points to the coefficients of the
    expanded polynomial, highest power first (as numpy expects)."""
    if len(p) == 4:
        return (-p[0] + 3*(p[1] - p[2]) + p[3],
                3*(p[0] - 2*p[1] + p[2]),
                3*(p[1] - p[0]),
                p[0])
    elif len(p) == 2:
        return (p[1] - p[0], p[0])
    raise ValueError("Only lines and cubics are supported.")


def quadratic2cubic(start, control, end):
    """Degree-raises a quadratic Bezier to an equivalent cubic."""
    return (start, start/3 + 2*control/3, 2*control/3 + end/3, end)


# Curve Splitting #############################################################

def split_bezier(bpoints, t):
    """Uses deCasteljau's recursion to split the Bezier curve at t into two
    Bezier curves of the same order."""
    def split_bezier_recursion(bpoints_left_, bpoints_right_, bpoints_, t_):
        if len(bpoints_) == 1:
            bpoints_left_.append(bpoints_[0])
            bpoints_right_.append(bpoints_[0])
        else:
            new_points = [None]*(len(bpoints_) - 1)
            bpoints_left_.append(bpoints_[0])
            bpoints_right_.append(bpoints_[-1])
            for i in range(len(bpoints_) - 1):
                new_points[i] = (1 - t_)*bpoints_[i] + t_*bpoints_[i + 1]
            bpoints_left_, bpoints_right_ = split_bezier_recursion(
                bpoints_left_, bpoints_right_, new_points, t_)
        return bpoints_left_, bpoints_right_

    bpoints_left = []
    bpoints_right = []
    bpoints_left, bpoints_right = \
        split_bezier_recursion(bpoints_left, bpoints_right, bpoints, t)
    bpoints_right.reverse()
    return bpoints_left, bpoints_right


def halve_bezier(p):
    if len(p) == 4:
        return ([p[0], (p[0] + p[1])/2, (p[0] + 2*p[1] + p[2])/4,
                 (p[0] + 3*p[1] + 3*p[2] + p[3])/8],
                [(p[0] + 3*p[1] + 3*p[2] + p[3])/8,
                 (p[1] + 2*p[2] + p[3])/4, (p[2] + p[3])/2, p[3]])
    else:
        return split_bezier(p, 0.5)


def crop_bezier(p, t0, t1):
    """returns the control points of the piece of p between t0 and t1."""
    if t0 > t1:
        t0, t1 = t1, t0
    if is_same(t1, 0, 1e-12):
        return [p[0]]*len(p)
    left = split_bezier(p, t1)[0] if t1 < 1 else list(p)
    if t0 <= 0:
        return left
    return split_bezier(left, t0/t1)[1]


# Bounding Boxes ##############################################################

def bezier_real_minmax(a):
    """returns the minimum and maximum of one coordinate of a cubic given
    by the real control values a."""
    # the derivative is the quadratic with Bernstein coefficients
    # 3*(a1 - a0), 3*(a2 - a1), 3*(a3 - a2)
    d1 = 3*(a[1] - a[0])
    d2 = 3*(a[2] - a[1])
    d3 = 3*(a[3] - a[2])
    extremizers = roots01(quadratic_roots(d1 - 2*d2 + d3, 2*(d2 - d1), d1))
    values = [a[0], a[3]] + [bezier_point(a, t) for t in extremizers]
    return min(values), max(values)


def bezier_bounding_box(bez):
    """returns the exact bounding box for the segment in the form
    (xmin, xmax, ymin, ymax)."""
    if len(bez) == 2:
        return coarse_bounding_box(bez)
    xmin, xmax = bezier_real_minmax([p.real for p in bez])
    ymin, ymax = bezier_real_minmax([p.imag for p in bez])
    return xmin, xmax, ymin, ymax


def coarse_bounding_box(bez):
    """returns the box of the control points.  It always contains the curve
    and is much cheaper to compute than bezier_bounding_box()."""
    xs = [p.real for p in bez]
    ys = [p.imag for p in bez]
    return min(xs), max(xs), min(ys), max(ys)


def boxes_intersect(box1, box2, tol=0):
    """Determines if two rectangles, each input as a tuple
        (xmin, xmax, ymin, ymax), intersect.  Touching boxes intersect."""
    xmin1, xmax1, ymin1, ymax1 = box1
    xmin2, xmax2, ymin2, ymax2 = box2
    return (xmin1 <= xmax2 + tol and xmin2 <= xmax1 + tol and
            ymin1 <= ymax2 + tol and ymin2 <= ymax1 + tol)


def big_bounding_box(boxes):
    """returns the bounding box containing every box in `boxes`."""
    xmins, xmaxs, ymins, ymaxs = list(zip(*boxes))
    return min(xmins), max(xmaxs), min(ymins), max(ymaxs)


def box_center(box):
    xmin, xmax, ymin, ymax = box
    return complex((xmin + xmax)/2, (ymin + ymax)/2)


# Arc Length ##################################################################

def bezier_length(p, t0=0, t1=1, n=GAUSS_LEGENDRE_ORDER):
    """Arc length of p between t0 and t1 by fixed order Gauss-Legendre
    quadrature of the speed |p'(t)|."""
    if len(p) == 2:
        return abs(p[1] - p[0])*(t1 - t0)

    def speed(ts):
        return np.abs(bezier_derivative(p, ts))

    return float(fixed_quad(speed, t0, t1, n=n)[0])


def bezier_t_at_length(p, s, length=None):
    """Returns t such that the length of p from 0 to t is about s.

    The curve is sampled at about length/2 points and the bracketing
    chord is linearly interpolated; this is meant to be fast, not
    exact."""
    if length is None:
        length = bezier_length(p)
    if s <= 0 or length == 0:
        return 0.
    if s >= length:
        return 1.

    n = max(int(ceil(length/2)), T_AT_LENGTH_MIN_SAMPLES)
    total = 0
    previous = p[0]
    for i in range(1, n + 1):
        sample = bezier_point(p, i/n)
        d = abs(sample - previous)
        previous = sample
        total += d
        if total >= s and d > 0:
            return (i - 1 + (s - (total - d))/d)/n
    return 1.


# Projection ##################################################################

def line_project_point(line, z, limit=True):
    """returns (t, point, distance) for the point of `line` closest to z."""
    v = line[1] - line[0]
    d = dot(v, v)
    if d == 0:
        return 0., line[0], abs(z - line[0])
    t = dot(z - line[0], v)/d
    if limit:
        t = clamp(t, 0, 1)
    pt = line[0] + t*v
    return t, pt, abs(z - pt)


def bezier_project_point(p, z, tol=PROJECTION_TOLERANCE,
                         maxits=PROJECTION_MAXITS):
    """returns (t, point, distance) for the point of the cubic p closest
    to z.

    A coarse pass over PROJECTION_SAMPLES + 1 evenly spaced samples picks
    a bracket around the nearest sample, which is then narrowed with
    PROJECTION_PROBES evenly spaced probes until it is narrower than tol
    (or maxits iterations have run)."""
    n = PROJECTION_SAMPLES
    ts = np.linspace(0, 1, n + 1)
    dists = np.abs(bezier_point(p, ts) - z)
    k = int(np.argmin(dists))
    best_t = ts[k]
    t1 = max(0, k - 1)/n
    t2 = min(n, k + 1)/n

    m = PROJECTION_PROBES - 1
    its = 0
    while t2 - t1 > tol and its < maxits:
        v = t2 - t1
        probes = t1 + v*np.arange(m + 1)/m
        dists = np.abs(bezier_point(p, probes) - z)
        k = int(np.argmin(dists))
        best_t = probes[k]
        t1, t2 = t1 + v*max(0, k - 1)/m, t1 + v*min(m, k + 1)/m
        its += 1

    best_t = float(best_t)
    pt = bezier_point(p, best_t)
    return best_t, pt, abs(pt - z)


# Intersections ###############################################################

def line_intersection(line1, line2, extend=False):
    """Intersection point of two lines given by their end points, or None.

    Parallel, collinear and degenerate lines have no intersection.  With
    extend=True the lines are treated as infinite."""
    (a, b), (c, d) = line1, line2
    denom = cross(a - b, c - d)
    if is_same(denom, 0, 1e-9):
        return None
    t = cross(a - c, c - d)/denom
    u = cross(a - c, a - b)/denom
    if not extend and (t < 0 or t > 1 or u < 0 or u > 1):
        return None
    return a + t*(b - a)


def line_overlap(line1, line2):
    """returns the (start, end) of the common piece of two collinear lines,
    or None if they are not collinear or only touch."""
    v1 = line1[1] - line1[0]
    v2 = line2[1] - line2[0]
    if not is_same(cross(v1, v2), 0) or \
            not is_same(cross(v1, line2[0] - line1[0]), 0):
        return None
    vv = dot(v1, v1)
    if vv == 0 or v2 == 0:
        return None
    t1 = dot(line2[0] - line1[0], v1)/vv
    t2 = dot(line2[1] - line1[0], v1)/vv
    t_min = max(0, min(t1, t2))
    t_max = min(1, max(t1, t2))
    if t_min >= t_max:
        return None
    return line1[0] + t_min*v1, line1[0] + t_max*v1


def point_on_line(z, line, epsilon=POINT_EPSILON):
    """Checks if z lies on the line segment (up to `epsilon`)."""
    return points_equal(z, line_project_point(line, z)[1], epsilon)


def bezier_by_line_intersections(bezier, line):
    """Returns the points where the cubic `bezier` crosses the line segment
    `line`.

    The cubic is projected onto the line's normal, which turns the problem
    into finding the real roots in [0, 1] of a scalar cubic."""
    assert len(line) == 2
    line_box = coarse_bounding_box(line)
    if not boxes_intersect(coarse_bounding_box(bezier), line_box):
        return []

    a3, a2, a1, a0 = bezier2polynomial(bezier)
    v = complex(line[1].imag - line[0].imag, line[0].real - line[1].real)
    d = dot(line[0], v)

    xmin, xmax, ymin, ymax = line_box
    tol = LINE_BOX_TOLERANCE
    points = []
    for t in roots01(cubic_roots(dot(v, a3), dot(v, a2), dot(v, a1),
                                 dot(v, a0) - d)):
        z = bezier_point(bezier, t)
        if z.real < xmin - tol or z.real > xmax + tol:
            continue
        if z.imag < ymin - tol or z.imag > ymax + tol:
            continue
        points.append(z)
    return points


def bezier_bboxes_intersect(bez1, bez2):
    return (boxes_intersect(coarse_bounding_box(bez1),
                            coarse_bounding_box(bez2)) and
            boxes_intersect(bezier_bounding_box(bez1),
                            bezier_bounding_box(bez2)))


def _box_size(box):
    xmin, xmax, ymin, ymax = box
    return max(xmax - xmin, ymax - ymin)


def bezier_intersections(bez1, bez2, threshold=INTERSECTION_THRESHOLD):
    """Returns the points where the two cubics bez1 and bez2 meet.

    Both curves are halved recursively, following only the pairs whose
    bounding boxes overlap.  Once both boxes are smaller than `threshold`
    the centre of bez2's box is reported.  Solutions closer than
    sqrt(INTERSECTION_MERGE_SQDIST) are merged.
    Note: This will not terminate quickly if the curves coincide along a
    stretch; use bezier_overlap() to detect that case."""
    if not bezier_bboxes_intersect(bez1, bez2):
        return []

    def recurse(c1, c2):
        box1 = bezier_bounding_box(c1)
        box2 = bezier_bounding_box(c2)
        if max(_box_size(box1), _box_size(box2)) < threshold:
            return [box_center(box2)]
        c11, c12 = halve_bezier(c1)
        c21, c22 = halve_bezier(c2)
        found = []
        for h1, h2 in ((c11, c21), (c11, c22), (c12, c22), (c12, c21)):
            if bezier_bboxes_intersect(h1, h2):
                found += recurse(h1, h2)
        return found

    merged = []
    for z in recurse(bez1, bez2):
        if not any(square_distance(z, w) < INTERSECTION_MERGE_SQDIST
                   for w in merged):
            merged.append(z)
    return merged


def bezier_overlap(bez1, bez2, tol=None):
    """If bez1 and bez2 run along the same underlying curve for a while,
    returns the control points of the shared piece (as a piece of bez1).
    Otherwise returns None.

    This detects shared edges, not general curve equality: the shared
    piece must be delimited by end points of the two curves."""
    length1 = bezier_length(bez1)
    length2 = bezier_length(bez2)
    if length1 == 0 or length2 == 0:
        return None
    if tol is None:
        tol = max(POINT_EPSILON, 0.001*max(length1, length2))

    ts = []
    for t, z in ((0., bez1[0]), (1., bez1[-1])):
        if bezier_project_point(bez2, z)[2] < tol:
            ts.append(t)
    for z in (bez2[0], bez2[-1]):
        t, _, dist = bezier_project_point(bez1, z)
        if dist < tol:
            ts.append(t)
    if len(ts) < 2:
        return None

    t0, t1 = min(ts), max(ts)
    if is_same(t0, t1, 10*PROJECTION_TOLERANCE):
        return None

    piece = crop_bezier(bez1, t0, t1)
    for s in (0.25, 0.5, 0.75):
        if bezier_project_point(bez2, bezier_point(piece, s))[2] > tol:
            return None
    return piece

