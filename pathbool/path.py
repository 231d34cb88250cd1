"""This submodule contains the class definitions of the segment types
pathbool is built around, Line and CubicBezier (quadratics are
degree-raised to cubics on construction), and of Path, a chain of such
segments."""

# External dependencies
from collections import namedtuple
from collections.abc import Sequence
from copy import copy
from warnings import warn
import numpy as np

# Internal dependencies
from .bezier import (bezier_point, bezier_derivative, bezier2polynomial,
                     quadratic2cubic, split_bezier, crop_bezier,
                     bezier_bounding_box, coarse_bounding_box,
                     bezier_length, bezier_t_at_length, bezier_project_point,
                     line_project_point, line_intersection, line_overlap,
                     point_on_line, bezier_by_line_intersections,
                     bezier_intersections, bezier_overlap, big_bounding_box,
                     INTERSECTION_THRESHOLD)
from .misctools import (is_same, points_equal, format_point, InvariantError,
                        POINT_EPSILON)
from .polytools import real, imag
from .vector import normalize, tangent_to_normal

# Default Parameters ##########################################################

# kinds of Intersection
CROSSING = 'crossing'
OVERLAP = 'overlap'

# collinear line pieces shorter than this fraction of the line are touches,
# not overlaps
LINE_OVERLAP_MIN_FRACTION = 0.001

# point-in-region ray casting: rays go from the query point towards
# query + FAR_DISTANCE*offset for each offset in turn
FAR_DISTANCE = 1e6
RAY_OFFSETS = (17 + 25j, -13 + 19j, -7 - 11j, 11 - 17j)


Intersection = namedtuple('Intersection', 'point kind start end',
                          defaults=(None, None))
Intersection.__doc__ = """An intersection of two segments.  For overlaps,
`start` and `end` delimit the shared piece and `point` is its middle."""

PathIntersection = namedtuple(
    'PathIntersection', 'point kind start end segment other_segment')

Projection = namedtuple('Projection', 'point t distance')

PathProjection = namedtuple('PathProjection',
                            'point segment t length distance path',
                            defaults=(None,))
PathProjection.__doc__ = """The point of a path closest to a query point.
`segment` and `t` locate it on the path, `length` is its arc length
offset from the path start; `path` is set by PathList.project_point()."""


# Miscellaneous ###############################################################

def quadratic_bezier(start, control, end):
    """Returns the cubic equivalent to the quadratic Bezier curve with the
    given control points.  The quadratic control point is remembered so
    the segment serializes back as a 'Q' command."""
    return CubicBezier(*quadratic2cubic(start, control, end),
                       quadratic_control=control)


def is_path_segment(seg):
    return isinstance(seg, (Line, CubicBezier))


def concatpaths(list_of_paths):
    """Takes in a sequence of paths and returns their concatenations into a
    single path (following the order of the input sequence)."""
    return Path(*[seg for path in list_of_paths for seg in path])


def polygon(*points):
    """Converts a list of points to a Path composed of lines connecting those
    points, then closes the path by connecting the last point to the first."""
    return Path(*[Line(points[i], points[(i + 1) % len(points)])
                  for i in range(len(points))])


def transform_point(tf, z):
    """Applies the homogeneous 3x3 transformation matrix tf to the point z."""
    v = tf.dot(np.array([[z.real], [z.imag], [1.0]]))
    return v.item(0) + 1j*v.item(1)


def transform(curve, tf):
    """Transforms the curve by the homogeneous transformation matrix tf"""
    if all((tf == np.eye(3)).ravel()):
        return curve  # tf is identity, return curve as is

    if isinstance(curve, Path):
        return Path(*[transform(seg, tf) for seg in curve])
    elif isinstance(curve, CubicBezier):
        bpoints = [transform_point(tf, p) for p in curve.bpoints()]
        if curve.quadratic_control is not None:
            return quadratic_bezier(bpoints[0],
                                    transform_point(tf, curve.quadratic_control),
                                    bpoints[3])
        return CubicBezier(*bpoints)
    elif isinstance(curve, Line):
        return Line(transform_point(tf, curve.start),
                    transform_point(tf, curve.end))
    else:
        raise TypeError("Input `curve` should be a Path, Line, or "
                        "CubicBezier object.")


def ray_crossings(paths, pt):
    """Counts how often rays from `pt` towards far away points cross the
    given paths.

    A ray passing through a segment end point may count a crossing twice
    or miss a touch, so such rays are discarded and the next direction in
    RAY_OFFSETS is tried.  If every ray is ambiguous, the count of a ray
    with the majority parity is returned."""
    counts = []
    for offset in RAY_OFFSETS:
        ray = Line(pt, pt + FAR_DISTANCE*offset)
        count = 0
        ambiguous = False
        for path in paths:
            for seg in path:
                for hit in seg.intersect(ray):
                    count += 1
                    if points_equal(hit.point, seg.start) or \
                            points_equal(hit.point, seg.end):
                        ambiguous = True
        if not ambiguous:
            return count
        counts.append(count)

    warn("Every ray cast from {} passes through a segment end point; "
         "using a majority vote.".format(pt))
    odd = [c for c in counts if c % 2]
    even = [c for c in counts if not c % 2]
    return odd[0] if len(odd) > len(even) else even[0]


# Main Classes ################################################################


class Line(object):
    def __init__(self, start, end):
        self.start = start
        self.end = end

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return 'Line(start=%s, end=%s)' % (self.start, self.end)

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __ne__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return not self == other

    def __getitem__(self, item):
        return self.bpoints()[item]

    def __len__(self):
        return 2

    def almost_equals(self, other, epsilon=POINT_EPSILON):
        """Checks that other is a Line with the same end points, up to
        epsilon."""
        return (isinstance(other, Line) and
                points_equal(self.start, other.start, epsilon) and
                points_equal(self.end, other.end, epsilon))

    def point(self, t):
        """returns the point of the line at t."""
        distance = self.end - self.start
        return self.start + distance*t

    def length(self):
        """returns the length of the line segment."""
        return abs(self.end - self.start)

    def t_at_length(self, s):
        """returns t such that the piece of the line from 0 to t has length
        s."""
        l = self.length()
        if l == 0:
            return 0.
        return s/l

    def length_at_t(self, t):
        return self.length()*t

    def bpoints(self):
        """returns the Bezier control points of the segment."""
        return self.start, self.end

    def poly(self):
        """returns the line as a Polynomial object."""
        return np.poly1d(bezier2polynomial(self.bpoints()))

    def derivative(self, t=None):
        """returns the derivative of the segment (at any t)."""
        return self.end - self.start

    def unit_tangent(self, t=None):
        """returns the unit tangent of the segment.  A zero-length line has
        the zero vector as tangent."""
        return normalize(self.end - self.start)

    def normal(self, t=None):
        """returns the (right hand rule) unit normal vector to self at t."""
        return -1j*self.unit_tangent(t)

    def reversed(self):
        """returns a copy of the Line object with its orientation reversed."""
        return Line(self.end, self.start)

    def split(self, t):
        """returns two segments, whose union is this segment and which join at
        self.point(t)."""
        pt = self.point(t)
        return Line(self.start, pt), Line(pt, self.end)

    def cropped(self, t0, t1):
        """returns a cropped copy of this segment which starts at
        self.point(t0) and ends at self.point(t1)."""
        return Line(self.point(t0), self.point(t1))

    def bbox(self):
        """returns the bounding box for the segment in the form
        (xmin, xmax, ymin, ymax)."""
        return coarse_bounding_box(self.bpoints())

    coarse_bbox = bbox

    def project_point(self, pt, limit=True):
        """returns the Projection of pt on the line.  With limit=False the
        line is treated as infinite."""
        t, closest, distance = line_project_point(self.bpoints(), pt, limit)
        return Projection(closest, t, distance)

    def is_on(self, pt, epsilon=POINT_EPSILON):
        return point_on_line(pt, self.bpoints(), epsilon)

    def overlap(self, other):
        """returns the piece (as a Line) this line shares with the collinear
        line `other`, or None."""
        if not isinstance(other, Line):
            return other.overlap(self) if isinstance(other, CubicBezier) \
                else None
        piece = line_overlap(self.bpoints(), other.bpoints())
        if piece is None:
            return None
        return Line(*piece)

    def intersect(self, other_seg, include_overlaps=False):
        """Finds the intersections of two segments.

        Returns:
            (list[Intersection]) the crossing points, or, when
            include_overlaps is set and the segments are collinear, the
            shared piece."""
        if isinstance(other_seg, Line):
            if include_overlaps:
                piece = self.overlap(other_seg)
                if piece is not None and piece.length() > \
                        LINE_OVERLAP_MIN_FRACTION*self.length():
                    return [Intersection(piece.point(0.5), OVERLAP,
                                         piece.start, piece.end)]
            pt = line_intersection(self.bpoints(), other_seg.bpoints())
            if pt is None:
                return []
            return [Intersection(pt, CROSSING)]
        elif isinstance(other_seg, CubicBezier):
            return other_seg.intersect(self, include_overlaps)
        elif isinstance(other_seg, Path):
            raise TypeError(
                "other_seg must be a path segment, not a Path object, use "
                "Path.intersect().")
        else:
            raise TypeError("other_seg must be a path segment.")


class CubicBezier(object):
    def __init__(self, start, control1, control2, end, quadratic_control=None):
        self.start = start
        self.control1 = control1
        self.control2 = control2
        self.end = end

        # set when this cubic was degree-raised from a quadratic
        self.quadratic_control = quadratic_control

        # computed once, on first access
        self._length = None
        self._bbox = None

    def __hash__(self):
        return hash((self.start, self.control1, self.control2, self.end))

    def __repr__(self):
        return 'CubicBezier(start=%s, control1=%s, control2=%s, end=%s)' % (
            self.start, self.control1, self.control2, self.end)

    def __eq__(self, other):
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return self.start == other.start and self.end == other.end \
            and self.control1 == other.control1 \
            and self.control2 == other.control2

    def __ne__(self, other):
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return not self == other

    def __getitem__(self, item):
        return self.bpoints()[item]

    def __len__(self):
        return 4

    def almost_equals(self, other, epsilon=POINT_EPSILON):
        return (isinstance(other, CubicBezier) and
                all(points_equal(p, q, epsilon)
                    for p, q in zip(self.bpoints(), other.bpoints())))

    def point(self, t):
        """Evaluate the cubic Bezier curve at t using Horner's rule."""
        return bezier_point(self.bpoints(), t)

    def length(self):
        """returns the arc length of the curve (25 point Gauss-Legendre
        quadrature), computed on first use."""
        if self._length is None:
            self._length = bezier_length(self.bpoints())
        return self._length

    def t_at_length(self, s):
        """Returns a float, t, such that the curve from 0 to t has length
        approximately s."""
        return bezier_t_at_length(self.bpoints(), s, self.length())

    def length_at_t(self, t):
        if t <= 0:
            return 0.
        if t >= 1:
            return self.length()
        return self.split(t)[0].length()

    def bpoints(self):
        """returns the Bezier control points of the segment."""
        return self.start, self.control1, self.control2, self.end

    def poly(self):
        """Returns a the cubic as a Polynomial object."""
        return np.poly1d(bezier2polynomial(self.bpoints()))

    def derivative(self, t):
        """returns the derivative of the segment at t.
        Note: Bezier curves can have points where their derivative vanishes.
        If you are interested in the tangent direction, use the unit_tangent()
        method instead."""
        return bezier_derivative(self.bpoints(), t)

    def unit_tangent(self, t):
        """returns the unit tangent vector of the segment at t (centered at
        the origin and expressed as a complex number).  Where the derivative
        vanishes at an end point, the direction towards the nearest distinct
        control point is used."""
        d = self.derivative(t)
        if d == 0:
            if t < 0.5:
                others = (self.control2, self.end)
                base = self.start
            else:
                others = (self.control1, self.start)
                base = self.end
            for p in others:
                if p != base:
                    d = (p - base) if t < 0.5 else (base - p)
                    break
        return normalize(d)

    def normal(self, t):
        """returns the (right hand rule) unit normal vector to self at t."""
        return -1j * self.unit_tangent(t)

    def reversed(self):
        """returns a copy of the CubicBezier object with its orientation
        reversed."""
        new_cub = CubicBezier(self.end, self.control2, self.control1,
                              self.start,
                              quadratic_control=self.quadratic_control)
        new_cub._length = self._length
        new_cub._bbox = self._bbox
        return new_cub

    def split(self, t):
        """Splits a copy of `self` at t and returns the two subsegments.
        Both halves share the point self.point(t)."""
        bpoints1, bpoints2 = split_bezier(self.bpoints(), t)
        pt = self.point(t)
        bpoints1[-1] = bpoints2[0] = pt
        return CubicBezier(*bpoints1), CubicBezier(*bpoints2)

    def cropped(self, t0, t1):
        """returns a cropped copy of this segment which starts at
        self.point(t0) and ends at self.point(t1)."""
        return CubicBezier(*crop_bezier(self.bpoints(), t0, t1))

    def bbox(self):
        """returns the exact bounding box in format (xmin, xmax, ymin,
        ymax)."""
        if self._bbox is None:
            self._bbox = bezier_bounding_box(self.bpoints())
        return self._bbox

    def coarse_bbox(self):
        """returns the bounding box of the control points."""
        return coarse_bounding_box(self.bpoints())

    def project_point(self, pt):
        """returns the Projection of pt on the curve (always a point of the
        curve, 0 <= t <= 1)."""
        t, closest, distance = bezier_project_point(self.bpoints(), pt)
        return Projection(closest, t, distance)

    def is_on(self, pt, epsilon=POINT_EPSILON):
        return points_equal(self.project_point(pt).point, pt, epsilon)

    def overlap(self, other):
        """returns the piece (as a CubicBezier) of self running along the
        same curve as other, or None."""
        if not isinstance(other, CubicBezier):
            return None
        piece = bezier_overlap(self.bpoints(), other.bpoints())
        if piece is None:
            return None
        return CubicBezier(*piece)

    def intersect(self, other_seg, include_overlaps=False,
                  threshold=INTERSECTION_THRESHOLD):
        """Finds the intersections of two segments.

        Returns:
            (list[Intersection]) the points where the segments meet, plus
            the shared piece if include_overlaps is set and the curves
            coincide for a while.
        """
        if isinstance(other_seg, Line):
            points = bezier_by_line_intersections(self.bpoints(),
                                                  other_seg.bpoints())
            if not points:
                # the roots miss touches at the curve's own end points
                if other_seg.is_on(self.start):
                    points = [self.start]
                elif other_seg.is_on(self.end):
                    points = [self.end]
            return [Intersection(pt, CROSSING) for pt in points]
        elif isinstance(other_seg, CubicBezier):
            intersections = [
                Intersection(pt, CROSSING) for pt in bezier_intersections(
                    self.bpoints(), other_seg.bpoints(), threshold)]
            if include_overlaps:
                piece = self.overlap(other_seg)
                if piece is not None:
                    intersections.append(Intersection(
                        piece.point(0.5), OVERLAP, piece.start, piece.end))
            return intersections
        elif isinstance(other_seg, Path):
            raise TypeError("`other_seg` must be a path segment, not a "
                            "`Path` object, use `Path.intersect()`.")
        else:
            raise TypeError("`other_seg` must be a path segment.")


class Path(Sequence):
    """A Path is an immutable sequence of path segments, each one starting
    where the previous one ends."""

    def __init__(self, *segments):
        for seg in segments:
            if not is_path_segment(seg):
                raise TypeError("Path segments must be Line or CubicBezier "
                                "objects, not {}.".format(type(seg)))
        self._segments = tuple(segments)
        self._lengths = None
        self._length = None

    def __hash__(self):
        return hash(self._segments)

    def __getitem__(self, index):
        return self._segments[index]

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __repr__(self):
        return "Path({})".format(
            ",\n     ".join(repr(x) for x in self._segments))

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __ne__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return not self == other

    @property
    def start(self):
        return self._segments[0].start if self._segments else None

    @property
    def end(self):
        return self._segments[-1].end if self._segments else None

    def clone(self):
        """returns a copy of the path that shares no segment objects with
        it."""
        return Path(*[copy(seg) for seg in self])

    def reversed(self):
        """returns a copy of the Path object with its orientation reversed."""
        newpath = [seg.reversed() for seg in self]
        newpath.reverse()
        return Path(*newpath)

    def joined(self, *paths):
        """returns this path followed by the segments of `paths`."""
        return concatpaths((self,) + paths)

    def iscontinuous(self):
        """Checks if a path is continuous with respect to its
        parameterization."""
        return all(points_equal(self[i].end, self[i+1].start)
                   for i in range(len(self) - 1))

    def isclosed(self):
        """This function determines if a connected path is closed."""
        assert len(self) != 0
        assert self.iscontinuous()
        return points_equal(self.start, self.end)

    # Lengths #################################################################

    def _calc_lengths(self):
        if self._lengths is None:
            self._lengths = [seg.length() for seg in self]
            self._length = sum(self._lengths)

    def length(self):
        self._calc_lengths()
        return self._length

    def _locate_length(self, d):
        """returns (segment_index, local_t) of the point at arc length d."""
        self._calc_lengths()
        for i, seg_length in enumerate(self._lengths):
            if d <= seg_length or i == len(self) - 1:
                return i, self[i].t_at_length(min(d, seg_length))
            d -= seg_length
        raise ValueError("Empty paths have no points.")

    def point_at_length(self, d):
        """returns the point at arc length d from the path start."""
        i, t = self._locate_length(d)
        return self[i].point(t)

    def tangent_at_length(self, d):
        """returns the unit tangent at arc length d from the path start."""
        i, t = self._locate_length(d)
        return self[i].unit_tangent(t)

    # Queries #################################################################

    def bbox(self):
        """returns bounding box in the form (xmin, xmax, ymin, ymax)."""
        return big_bounding_box([seg.bbox() for seg in self._segments])

    def project_point(self, pt):
        """returns the PathProjection of pt on the path."""
        best_index = None
        best = None
        for i, seg in enumerate(self):
            projection = seg.project_point(pt)
            if best is None or projection.distance < best.distance:
                best_index, best = i, projection
        if best is None:
            return PathProjection(pt, 0, 0., 0., 0.)

        self._calc_lengths()
        length = sum(self._lengths[:best_index]) + \
            self[best_index].length_at_t(best.t)
        return PathProjection(best.point, best_index, best.t, length,
                              best.distance)

    def is_on(self, pt, epsilon=POINT_EPSILON):
        return any(seg.is_on(pt, epsilon) for seg in self)

    def is_inside(self, pt):
        """Ray parity test: True if pt is enclosed by this (closed) path."""
        return ray_crossings([self], pt) % 2 == 1

    def area(self):
        """Find the signed area enclosed by the path (Green's theorem).

        Notes
        -----
        * With the y axis pointing down, as on screen, positive area results
        from clockwise parameterization of the path.
        * An open path is treated as closed by a straight line."""
        area_enclosed = 0
        segments = list(self)
        if segments and self.start != self.end:
            segments.append(Line(self.end, self.start))
        for seg in segments:
            x = real(seg.poly())
            dy = imag(seg.poly()).deriv()
            integrand = x*dy
            integral = integrand.integ()
            area_enclosed += integral(1) - integral(0)
        return float(area_enclosed)

    def is_clockwise(self):
        """Checks the orientation of the path in screen coordinates (y axis
        pointing down)."""
        return self.area() > 0

    def has_area(self):
        """False if the path just runs back and forth over itself."""
        if len(self) % 2 == 1:
            return True
        for i in range(0, len(self), 2):
            if not self[i].almost_equals(self[i + 1].reversed()):
                return True
        return False

    def intersect(self, other, include_overlaps=False):
        """Finds the intersections of `self` with `other`.

        Returns:
            (list[PathIntersection]) every intersection between a segment
            of self and a segment of other, tagged with the indices of the
            two segments."""
        other = other if isinstance(other, Path) else Path(other)
        intersection_list = []
        for i, seg1 in enumerate(self):
            for j, seg2 in enumerate(other):
                for hit in seg1.intersect(seg2, include_overlaps):
                    intersection_list.append(PathIntersection(
                        hit.point, hit.kind, hit.start, hit.end, i, j))
        return intersection_list

    # Transformations #########################################################

    def split(self, p1, p2=None):
        """Splits the path at one or two positions, each given as a tuple
        (segment_index, t), and returns the 2 or 3 resulting paths.

        When both positions are on the same segment, the second cut is made
        first and the first one is re-located on the remaining piece by arc
        length, since its t refers to the uncut segment."""
        i1, t1 = p1
        if p2 is not None:
            i2, t2 = p2
            if (i2, t2) < (i1, t1):
                raise ValueError("The second split position must come after "
                                 "the first one.")
            if i1 == i2:
                seg = self[i1]
                d1 = seg.length_at_t(t1)
                prefix, c = seg.split(t2)
                a, b = prefix.split(prefix.t_at_length(d1))
                return (Path(*(self[:i1] + (a,))),
                        Path(b),
                        Path(*((c,) + self[i1 + 1:])))

        a, b = self[i1].split(t1)
        first = Path(*(self[:i1] + (a,)))
        if p2 is None:
            return first, Path(*((b,) + self[i1 + 1:]))
        c, d = self[i2].split(t2)
        return (first,
                Path(*((b,) + self[i1 + 1:i2] + (c,))),
                Path(*((d,) + self[i2 + 1:])))

    def offset(self, n):
        """Offsets the path by n along the normals (Tiller-Hanson).

        The control polygon of every segment is exploded into edges, each
        edge is moved by n, and consecutive edges are re-joined at the
        intersection of their extensions.  Parallel neighbours keep their
        un-joined ends."""
        entries = []
        for seg in self:
            if isinstance(seg, Line):
                entries.append(['L', seg.start, seg.end])
            elif isinstance(seg, CubicBezier):
                entries.append(['C', seg.start, seg.control1])
                entries.append(['C', seg.control1, seg.control2])
                entries.append(['C', seg.control2, seg.end])
            else:
                raise InvariantError("Unknown segment type {}".format(
                    type(seg)))

        for entry in entries:
            shift = n*tangent_to_normal(normalize(entry[2] - entry[1]))
            entry[1] += shift
            entry[2] += shift

        joined = []
        for prev, current in zip(entries, entries[1:]):
            corner = line_intersection((prev[1], prev[2]),
                                       (current[1], current[2]), extend=True)
            if corner is not None:
                prev[2] = corner
                if not points_equal(current[2], corner):
                    current[1] = corner
            joined.append(prev)
        joined.append(entries[-1])

        segments = []
        current = joined[0][1]
        i = 0
        while i < len(joined):
            kind = joined[i][0]
            if kind == 'L':
                segments.append(Line(current, joined[i][2]))
                i += 1
            else:
                segments.append(CubicBezier(current, joined[i][2],
                                            joined[i + 1][2],
                                            joined[i + 2][2]))
                i += 3
            current = segments[-1].end
        return Path(*segments)

    def cleaned(self):
        """returns a copy of the path without repeated (consecutive
        duplicate) segments."""
        segments = []
        for seg in self:
            if segments and seg == segments[-1]:
                continue
            segments.append(seg)
        return Path(*segments)

    def simplified(self):
        """returns a copy of the path where zero-length lines are dropped and
        consecutive lines running in the same direction are merged."""
        if len(self) <= 1:
            return self

        simplified_segments = []
        i = 0
        while i < len(self):
            seg = self[i]
            i += 1
            if not isinstance(seg, Line):
                simplified_segments.append(seg)
                continue
            if points_equal(seg.start, seg.end):
                continue

            direction = seg.unit_tangent()
            end = seg.end
            while i < len(self) and isinstance(self[i], Line):
                nxt = self[i]
                if points_equal(nxt.start, nxt.end):
                    i += 1
                    continue
                next_direction = nxt.unit_tangent()
                if not (is_same(direction.real, next_direction.real) and
                        is_same(direction.imag, next_direction.imag)):
                    break
                end = nxt.end
                i += 1

            if not points_equal(seg.start, end):
                simplified_segments.append(Line(seg.start, end))
        return Path(*simplified_segments)

    def d(self):
        """Returns a compact path d-string for the path object, e.g.
        'M 0,0 L 10,0 C 10,5,5,10,0,10'.  Coordinates are rounded to four
        decimals."""
        if len(self) == 0:
            return ''
        parts = []
        current_pos = None
        for segment in self:
            if current_pos is None or \
                    not points_equal(current_pos, segment.start):
                parts.append('M ' + format_point(segment.start))
            if isinstance(segment, Line):
                parts.append('L ' + format_point(segment.end))
            elif segment.quadratic_control is not None:
                parts.append('Q {},{}'.format(
                    format_point(segment.quadratic_control),
                    format_point(segment.end)))
            else:
                parts.append('C {},{},{}'.format(
                    format_point(segment.control1),
                    format_point(segment.control2),
                    format_point(segment.end)))
            current_pos = segment.end
        return ' '.join(parts)
