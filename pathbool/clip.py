"""This submodule contains the boolean operations on PathLists (union,
difference, intersection, xor and divide), an adaptation of the
Greiner-Hormann polygon clipping algorithm to curved segments.

    G. Greiner, K. Hormann, "Efficient clipping of arbitrary polygons",
    ACM Transactions on Graphics 17(2), 1998.

The boundaries of both operands are cut at their intersections and
threaded into rings of vertices, one ring per contour.  Each intersection
is linked to its twin in the other operand's ring and classified as
leaving (in->out) or entering (out->in) the other operand.  The result
contours are then traced by walking the rings, switching rings at every
intersection.
"""

# Internal dependencies
from .path import Path, OVERLAP
from .pathlist import PathList
from .misctools import is_same, points_equal, InvariantError
from .vector import angle

# Default Parameters ##########################################################

BOOLEAN_OPERATIONS = ('A union B', 'A not B', 'B not A', 'A intersection B',
                      'A xor B', 'A divide B')

# which operand's inside/outside status gets inverted when classifying
OPERATION_FLAGS = {'A union B': (False, False),
                   'A not B': (False, True),
                   'B not A': (True, False),
                   'A intersection B': (True, True)}

# run the (slow) consistency checks of the vertex graph
VERIFY = False

# bounds on the result walk
MAX_OUTER_WALK = 100
MAX_INNER_WALK = 1000

# segment ends may miss the following vertex by this fraction of the
# segment length
CONNECTION_TOLERANCE = 0.001

# vertex classification
IN_OUT = 'in->out'
OUT_IN = 'out->in'


# Vertex Graph ################################################################

class Vertex(object):
    """A vertex of a ring.  `prev`, `next` and `neighbor` are indices into
    the owning VertexGraph, `alpha` is the position of the vertex on the
    segment it was found on."""
    __slots__ = ('point', 'segment', 'alpha', 'intersect', 'operand',
                 'prev', 'next', 'neighbor', 'type')

    def __init__(self, point, segment, alpha, intersect, operand):
        self.point = point
        self.segment = segment
        self.alpha = alpha
        self.intersect = intersect
        self.operand = operand
        self.prev = None
        self.next = None
        self.neighbor = None
        self.type = None

    def __repr__(self):
        return 'Vertex(point={}, alpha={}, intersect={}, type={})'.format(
            self.point, self.alpha, self.intersect, self.type)


class VertexGraph(object):
    """The vertices of both operands of one boolean operation.

    `rings[k]` holds, for operand k, one list of vertex indices per contour.
    A graph is built for a single operation and discarded afterwards."""

    def __init__(self, a, b, include_overlaps=False):
        self.vertices = []
        self.rings = ([], [])
        self._build(a, b, include_overlaps)

    def __getitem__(self, index):
        return self.vertices[index]

    def _new_vertex(self, point, segment, alpha, intersect, operand):
        self.vertices.append(Vertex(point, segment, alpha, intersect,
                                    operand))
        return len(self.vertices) - 1

    def _add_pair(self, pt, key_a, seg_a, key_b, seg_b, found):
        i = self._new_vertex(pt, seg_a, seg_a.project_point(pt).t, True, 0)
        j = self._new_vertex(pt, seg_b, seg_b.project_point(pt).t, True, 1)
        self.vertices[i].neighbor = j
        self.vertices[j].neighbor = i
        found[0].setdefault(key_a, []).append(i)
        found[1].setdefault(key_b, []).append(j)

    def _build(self, a, b, include_overlaps):
        # intersection vertices, keyed by (contour, segment) of their owner
        found = ({}, {})
        for ka, path_a in enumerate(a):
            for sa, seg_a in enumerate(path_a):
                for kb, path_b in enumerate(b):
                    for sb, seg_b in enumerate(path_b):
                        for hit in seg_a.intersect(seg_b, include_overlaps):
                            points = (hit.start, hit.end) \
                                if hit.kind == OVERLAP else (hit.point,)
                            for pt in points:
                                self._add_pair(pt, (ka, sa), seg_a,
                                               (kb, sb), seg_b, found)

        for operand, path_list in enumerate((a, b)):
            for k, path in enumerate(path_list):
                ring = []
                for s, seg in enumerate(path):
                    ring.append(self._new_vertex(seg.start, seg, 0, False,
                                                 operand))
                    ring.extend(sorted(found[operand].get((k, s), []),
                                       key=lambda v: self.vertices[v].alpha))
                self._link(ring)
                self.rings[operand].append(ring)

    def _link(self, ring):
        n = len(ring)
        for i, v in enumerate(ring):
            self.vertices[v].next = ring[(i + 1) % n]
            self.vertices[v].prev = ring[i - 1]

    def operand_indices(self, operand):
        return [v for ring in self.rings[operand] for v in ring]

    def intersections(self, operand):
        return [v for v in self.operand_indices(operand)
                if self.vertices[v].intersect]

    # Degenerate contacts #####################################################

    def remove_duplicates(self, ring):
        """Drops intersections coinciding with a segment start or with
        another intersection, handing their links over to the vertex that
        stays.  Returns the surviving ring."""
        vs = self.vertices
        removed = set()
        for k, i in enumerate(ring):
            if i in removed:
                continue
            current = vs[i]
            # neighbours by position, the links may already have been
            # redirected around a removed vertex
            p, n = ring[k - 1], ring[(k + 1) % len(ring)]
            prev, nxt = vs[p], vs[n]

            if prev.intersect and is_same(prev.alpha, 1):
                vs[prev.prev].next = i
                current.prev = prev.prev
                removed.add(p)

                current.intersect = True
                current.alpha = 0
                current.neighbor = prev.neighbor
                vs[current.neighbor].neighbor = i

            if points_equal(nxt.point, current.point) and nxt.intersect and \
                    is_same(nxt.alpha, current.alpha) and \
                    not is_same(nxt.alpha, 0):
                vs[nxt.next].prev = i
                current.next = nxt.next
                removed.add(n)

                vs[nxt.neighbor].neighbor = i

            if nxt.intersect and is_same(nxt.alpha, 0):
                vs[nxt.next].prev = i
                current.next = nxt.next
                removed.add(n)

                current.intersect = True
                current.alpha = 0
                current.neighbor = nxt.neighbor
                vs[current.neighbor].neighbor = i

        return [i for i in ring if i not in removed]

    def prune(self):
        for operand in (0, 1):
            self.rings[operand][:] = [self.remove_duplicates(ring)
                                      for ring in self.rings[operand]]

    # Splitting ###############################################################

    def recut(self, ring):
        """Splits the segments so that every vertex owns the piece of its
        segment that leads to the next vertex."""
        vs = self.vertices
        for i, v in enumerate(ring):
            current = vs[v]
            if current.intersect and current.alpha != 0:
                continue

            clips = []
            for w in ring[i + 1:]:
                if not vs[w].intersect or vs[w].alpha == 0:
                    break
                clips.append(vs[w])
            if not clips:
                continue
            clips.reverse()

            # alpha is relative to the uncut segment, the cuts are made
            # back to front
            remaining = current.segment
            r = 1
            for c in clips:
                first, second = remaining.split(c.alpha/r)
                r = c.alpha
                remaining = first
                c.segment = second
            current.segment = remaining

    def recut_all(self):
        for rings in self.rings:
            for ring in rings:
                self.recut(ring)

    # Verification ############################################################

    def check_links(self):
        """Raises InvariantError unless the rings are well formed cycles
        containing each vertex once and intersections are linked to each
        other across the operands."""
        vs = self.vertices
        seen = set()
        for operand, rings in enumerate(self.rings):
            for ring in rings:
                n = len(ring)
                for i, v in enumerate(ring):
                    if v in seen:
                        raise InvariantError(
                            "Vertex {} is in more than one ring.".format(v))
                    seen.add(v)
                    vertex = vs[v]
                    if vertex.operand != operand:
                        raise InvariantError(
                            "Vertex {} is in the wrong operand's "
                            "ring.".format(v))
                    if vertex.next != ring[(i + 1) % n] or \
                            vertex.prev != ring[i - 1]:
                        raise InvariantError(
                            "Ring links of vertex {} do not match the ring "
                            "order.".format(v))
                    if vs[vertex.next].prev != v or vs[vertex.prev].next != v:
                        raise InvariantError(
                            "Vertex {} has one-sided ring links.".format(v))

        for v in seen:
            vertex = vs[v]
            if not vertex.intersect:
                continue
            neighbor = vertex.neighbor
            if neighbor is None or vs[neighbor].neighbor != v:
                raise InvariantError(
                    "Intersection {} is not linked to its twin.".format(v))
            if neighbor not in seen or \
                    vs[neighbor].operand == vertex.operand or \
                    not vs[neighbor].intersect:
                raise InvariantError(
                    "Intersection {} is linked to a vertex of the same "
                    "operand or one outside the rings.".format(v))

    def check_connected(self):
        """Raises InvariantError unless every vertex's segment ends where
        the following vertex is."""
        vs = self.vertices
        for rings in self.rings:
            for ring in rings:
                for i, v in enumerate(ring):
                    seg = vs[v].segment
                    nxt = vs[ring[(i + 1) % len(ring)]]
                    tol = max(seg.length()*CONNECTION_TOLERANCE, 1e-9)
                    if not points_equal(seg.end, nxt.point, tol):
                        raise InvariantError(
                            "Segment of vertex {} ends at {}, the next "
                            "vertex is at {}.".format(v, seg.end, nxt.point))

    # Classification ##########################################################

    def is_degeneracy(self, v):
        vertex = self.vertices[v]
        neighbor = self.vertices[vertex.neighbor]
        return vertex.intersect and (vertex.alpha in (0, 1) or
                                     neighbor.alpha in (0, 1))

    def is_touch(self, v):
        """True if the two boundaries meeting at v touch without crossing,
        i.e. the directions to the vertices around v on both rings do not
        alternate between the rings."""
        vs = self.vertices
        vertex = vs[v]
        neighbor = vs[vertex.neighbor]
        rays = [('o', angle(vs[neighbor.prev].point - vertex.point)),
                ('o', angle(vs[neighbor.next].point - vertex.point)),
                ('t', angle(vs[vertex.prev].point - vertex.point)),
                ('t', angle(vs[vertex.next].point - vertex.point))]
        rays.sort(key=lambda ray: ray[1])
        return any(rays[i][0] == rays[i + 1][0] for i in range(3))

    def classify(self, operands, flags):
        """Marks each intersection as in->out or out->in of the other
        operand, un-marking touching contacts."""
        vs = self.vertices
        for operand in (0, 1):
            other = operands[1 - operand]
            for ring in self.rings[operand]:
                if not ring:
                    continue
                # a first point on the other boundary says nothing, use the
                # stretch leading into it
                point = vs[ring[0]].point
                if other.is_on(point):
                    point = vs[ring[-1]].segment.point(0.5)
                status = other.is_inside(point)
                if flags[operand]:
                    status = not status

                for index, v in enumerate(ring):
                    vertex = vs[v]
                    if not vertex.intersect:
                        continue
                    # the first vertex of a contour is never treated as a
                    # touch
                    if self.is_degeneracy(v) and index > 0 and \
                            self.is_touch(v):
                        vertex.intersect = False
                        vs[vertex.neighbor].intersect = False
                        continue
                    vertex.type = IN_OUT if status else OUT_IN
                    status = not status

    # Walk ####################################################################

    def walk(self, max_outer=MAX_OUTER_WALK, max_inner=MAX_INNER_WALK):
        """Traces the result contours, returns them as lists of vertex
        indices (the first vertex repeated at the end)."""
        vs = self.vertices
        unprocessed = self.intersections(0)
        contours = []

        def mark_processed(v):
            unprocessed[:] = [u for u in unprocessed
                              if u != v and u != vs[v].neighbor]

        while unprocessed:
            start = current = unprocessed[0]
            contour = [current]
            contours.append(contour)

            outer = 0
            while True:
                mark_processed(current)
                kind = vs[current].type
                if kind == IN_OUT:
                    step = 'next'
                elif kind == OUT_IN:
                    step = 'prev'
                else:
                    raise InvariantError(
                        "Intersection {} was never classified.".format(
                            current))

                inner = 0
                while True:
                    current = getattr(vs[current], step)
                    if vs[current].intersect:
                        break
                    contour.append(current)
                    inner += 1
                    if inner >= max_inner:
                        raise InvariantError(
                            "No intersection found after {} "
                            "vertices.".format(max_inner))

                if vs[current].neighbor is None:
                    raise InvariantError(
                        "Intersection {} has no twin.".format(current))
                current = vs[current].neighbor
                contour.append(current)
                mark_processed(current)

                if current == start:
                    break
                outer += 1
                if outer >= max_outer:
                    raise InvariantError(
                        "Contour did not close after {} "
                        "intersections.".format(max_outer))
        return contours

    def arrange(self, contour):
        """returns the segments joining the consecutive vertices of a
        walked contour."""
        vs = self.vertices
        segments = []
        for current, nxt in zip(contour, contour[1:]):
            cur = vs[current]
            if cur.next == nxt or cur.next == vs[nxt].neighbor:
                segments.append(cur.segment)
            elif cur.prev == nxt:
                segments.append(vs[nxt].segment.reversed())
            elif cur.prev == vs[nxt].neighbor:
                segments.append(vs[vs[nxt].neighbor].segment.reversed())
            else:
                raise InvariantError(
                    "Vertices {} and {} of a result contour are not "
                    "adjacent.".format(current, nxt))
        return segments


def build_vertex_graph(a, b, include_overlaps=False, verify=False):
    """Intersects the operands and returns their VertexGraph, pruned and
    with its segments re-cut."""
    graph = VertexGraph(a, b, include_overlaps)
    graph.prune()
    if verify:
        graph.check_links()
    graph.recut_all()
    if verify:
        graph.check_connected()
    return graph


# Boolean Operations ##########################################################

def _within(region, other):
    """True if every segment start of `region` is inside or on `other`."""
    return all(other.is_on(seg.start) or other.is_inside(seg.start)
               for seg in region.segments())


def _without_crossings(a, b, operation):
    """Results for operands whose boundaries do not cross."""
    if _within(a, b):
        return {'A union B': [b],
                'A not B': [],
                'B not A': [b + a],
                'A intersection B': [a]}[operation]
    if _within(b, a):
        return {'A union B': [a],
                'A not B': [a + b],
                'B not A': [],
                'A intersection B': [b]}[operation]
    return {'A union B': [a, b],
            'A not B': [a],
            'B not A': [b],
            'A intersection B': []}[operation]


def _off_boundary_point(path, other):
    for seg in path:
        for pt in (seg.start, seg.point(0.5)):
            if not other.is_on(pt):
                return pt
    return path.start


def _untouched_contours(graph, operands, flags):
    """The contours no result contour was walked along that still bound
    the result, e.g. the holes of one operand lying outside the other for
    a union."""
    kept = []
    for operand in (0, 1):
        other = operands[1 - operand]
        for path, ring in zip(operands[operand], graph.rings[operand]):
            if not ring or any(graph[v].intersect for v in ring):
                continue
            inside = other.is_inside(_off_boundary_point(path, other))
            if inside == flags[operand]:
                kept.append(path)
    return kept


def _clip(a, b, operation, include_overlaps, verify):
    graph = build_vertex_graph(a, b, include_overlaps, verify)
    flags = OPERATION_FLAGS[operation]
    if graph.intersections(0):
        graph.classify((a, b), flags)

    if not graph.intersections(0):
        results = _without_crossings(a, b, operation)
    else:
        paths = [Path(*graph.arrange(contour))
                 for contour in graph.walk()]
        paths += _untouched_contours(graph, (a, b), flags)
        result = PathList(*[p for p in paths if len(p)])

        if operation == 'A intersection B' and not result.segments():
            results = []
        else:
            results = [result]
    return [pl.normalize().clone() for pl in results]


def apply_boolean_operation(a, b, operation, include_overlaps=False,
                            verify=None):
    """Applies a boolean operation to the regions bounded by the PathLists
    a and b.

    Args:
        a, b: PathLists of closed contours, without self intersections
        operation: one of BOOLEAN_OPERATIONS
        include_overlaps: also cut the boundaries where they share a
            stretch, not only where they cross
        verify: run the consistency checks of the vertex graph (defaults
            to the module level VERIFY)

    Returns:
        a list of normalized PathLists.  'A xor B' gives the pieces of
        'A not B' followed by those of 'B not A', 'A divide B' adds the
        pieces of 'A intersection B'.

    Raises:
        ValueError: on an unknown operation
        InvariantError: if the vertex graph turns out inconsistent
    """
    if operation not in BOOLEAN_OPERATIONS:
        raise ValueError("Unknown boolean operation {!r}, expected one of "
                         "{}.".format(operation, BOOLEAN_OPERATIONS))
    if verify is None:
        verify = VERIFY

    if operation == 'A xor B':
        return (_clip(a, b, 'A not B', include_overlaps, verify) +
                _clip(a, b, 'B not A', include_overlaps, verify))
    if operation == 'A divide B':
        return (apply_boolean_operation(a, b, 'A xor B', include_overlaps,
                                        verify) +
                _clip(a, b, 'A intersection B', include_overlaps, verify))
    return _clip(a, b, operation, include_overlaps, verify)
