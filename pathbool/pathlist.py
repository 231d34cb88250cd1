"""This submodule contains the PathList class, the contours bounding one
region (outer boundaries and holes), along with the containment logic
used to normalize their winding."""

# External dependencies
from collections.abc import Sequence

# Internal dependencies
from .path import Path, PathProjection, ray_crossings
from .bezier import big_bounding_box
from .misctools import ContractError, ContainmentCycleError, POINT_EPSILON


# Default Parameters ##########################################################

# normalize() gives up after this many containment levels
MAX_PEEL_ROUNDS = 100


class PathList(Sequence):
    """An ordered, immutable collection of paths forming the boundary of one
    region.

    After normalize(), contours at even containment depth are outer
    boundaries with positive (clockwise) area and contours at odd depth are
    holes with negative (counter-clockwise) area."""

    def __init__(self, *paths):
        for path in paths:
            if not isinstance(path, Path):
                raise TypeError("PathList items must be Path objects, "
                                "not {}.".format(type(path)))
        self._paths = tuple(paths)

    def __getitem__(self, index):
        return self._paths[index]

    def __len__(self):
        return len(self._paths)

    def __iter__(self):
        return iter(self._paths)

    def __add__(self, other):
        if not isinstance(other, PathList):
            return NotImplemented
        return PathList(*(self._paths + other._paths))

    def __eq__(self, other):
        if not isinstance(other, PathList):
            return NotImplemented
        return self._paths == other._paths

    def __ne__(self, other):
        if not isinstance(other, PathList):
            return NotImplemented
        return not self == other

    def __hash__(self):
        return hash(self._paths)

    def __repr__(self):
        return "PathList({})".format(
            ",\n         ".join(repr(p) for p in self._paths))

    def singular(self):
        """returns the only path of this PathList."""
        if len(self) != 1:
            raise ContractError("Expected exactly one path, found "
                                "{}.".format(len(self)))
        return self._paths[0]

    def all(self):
        return list(self._paths)

    def segments(self):
        return [seg for path in self for seg in path]

    def clone(self):
        return PathList(*[path.clone() for path in self])

    def bbox(self):
        """returns the bounding box (xmin, xmax, ymin, ymax) of all paths."""
        return big_bounding_box([path.bbox() for path in self if len(path)])

    def d(self):
        return ' '.join(path.d() for path in self)

    def area(self):
        """Signed area of the region: holes of a normalized PathList count
        negatively."""
        return sum(path.area() for path in self)

    def project_point(self, pt):
        """returns the PathProjection of pt on the nearest path, with its
        `path` field set to that path's index."""
        best = None
        for i, path in enumerate(self):
            if not len(path):
                continue
            projection = path.project_point(pt)._replace(path=i)
            if best is None or projection.distance < best.distance:
                best = projection
        if best is None:
            return PathProjection(pt, 0, 0., 0., 0., None)
        return best

    def is_on(self, pt, epsilon=POINT_EPSILON):
        return any(path.is_on(pt, epsilon) for path in self)

    def is_inside(self, pt):
        """True if pt lies inside the region (odd number of boundary
        crossings)."""
        return ray_crossings(self, pt) % 2 == 1

    def is_in_hole(self, pt):
        """True if pt lies within an outer contour but inside one of its
        holes."""
        count = ray_crossings(self, pt)
        return count > 1 and count % 2 == 0

    def intersect(self, path, include_overlaps=False):
        """returns the PathIntersections of every path in this list with
        `path`, as (path_index, intersection) tuples."""
        return [(i, hit) for i, own in enumerate(self)
                for hit in own.intersect(path, include_overlaps)]

    def normalize(self):
        """returns a new PathList, ordered by containment depth, where outer
        contours are clockwise and holes counter-clockwise."""
        levels = containment_levels(self)
        normalized = []
        for depth, level in enumerate(levels):
            for i in level:
                path = self[i]
                if (depth % 2 == 0) != path.is_clockwise():
                    path = path.reversed()
                normalized.append(path)
        return PathList(*normalized)


def contains(outer, inner):
    """True if every segment start of `inner` lies inside or on `outer`."""
    return all(outer.is_on(seg.start) or outer.is_inside(seg.start)
               for seg in inner)


def containment_matrix(paths):
    """returns `inside` where inside[i][j] is True if paths[i] lies within
    paths[j].  Of two contours containing each other, only the later one
    counts as contained."""
    n = len(paths)
    inside = [[i != j and contains(paths[j], paths[i]) for j in range(n)]
              for i in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            if inside[i][j] and inside[j][i]:
                inside[i][j] = False
    return inside


def containment_levels(paths, max_rounds=MAX_PEEL_ROUNDS):
    """Peels contours round by round: a contour goes in the first round in
    which none of its containers remain.  Returns the list of rounds, each
    a list of indices in their original order."""
    inside = containment_matrix(paths)
    remaining = list(range(len(paths)))
    levels = []
    while remaining:
        if len(levels) >= max_rounds:
            raise ContainmentCycleError(
                "Contour nesting is deeper than {} levels.".format(max_rounds))
        level = [i for i in remaining
                 if not any(inside[i][j] for j in remaining)]
        if not level:
            raise ContainmentCycleError(
                "Contours {} contain each other.".format(remaining))
        levels.append(level)
        remaining = [i for i in remaining if i not in level]
    return levels


def split_disjoint(path_list):
    """Splits a PathList into one normalized PathList per top level contour,
    each holding that contour and everything nested inside it."""
    inside = containment_matrix(path_list)
    levels = containment_levels(path_list)
    depth = {}
    for d, level in enumerate(levels):
        for i in level:
            depth[i] = d

    def parent(i):
        containers = [j for j in range(len(path_list)) if inside[i][j]]
        if not containers:
            return None
        return max(containers, key=lambda j: depth[j])

    def root(i):
        while parent(i) is not None:
            i = parent(i)
        return i

    groups = {}
    order = []
    for i in range(len(path_list)):
        r = root(i)
        if r not in groups:
            groups[r] = []
            order.append(r)
        groups[r].append(path_list[i])
    return [PathList(*groups[r]).normalize() for r in order]
