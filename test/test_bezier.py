import numpy as np
import unittest
from math import pi
from pathbool.bezier import (bezier_point, bezier2polynomial, split_bezier,
                             crop_bezier, bezier_bounding_box,
                             coarse_bounding_box, boxes_intersect,
                             bezier_length, bezier_t_at_length,
                             line_project_point, bezier_project_point,
                             line_intersection, line_overlap, point_on_line,
                             bezier_by_line_intersections,
                             bezier_intersections, bezier_overlap,
                             quadratic2cubic)

# an arch from the origin to 100, peaking at y = 75
ARCH = (0, 100j, 100 + 100j, 100)

# quarter of the unit circle
QUARTER = (1, 1 + 0.5523j, 0.5523 + 1j, 1j)


def random_cubic():
    return tuple(complex(*xy) for xy in np.random.rand(4, 2)*100)


class TestBezierPoint(unittest.TestCase):
    def test_end_points(self):
        self.assertEqual(bezier_point(ARCH, 0), 0)
        self.assertEqual(bezier_point(ARCH, 1), 100)

    def test_midpoint(self):
        p = ARCH
        expected = (p[0] + 3*p[1] + 3*p[2] + p[3])/8
        self.assertAlmostEqual(bezier_point(p, 0.5), expected)

    def test_lines(self):
        self.assertEqual(bezier_point((0, 10 + 10j), 0.5), 5 + 5j)

    def test_numpy_arrays(self):
        ts = np.linspace(0, 1, 5)
        values = bezier_point(ARCH, ts)
        for t, z in zip(ts, values):
            self.assertAlmostEqual(z, bezier_point(ARCH, float(t)))


class TestBezier2Polynomial(unittest.TestCase):
    def test_bezier2polynomial(self):
        np.random.seed(1)
        for _ in range(5):
            b = random_cubic()
            p = np.poly1d(bezier2polynomial(b))
            for t in np.linspace(0, 1, 10):
                self.assertAlmostEqual(bezier_point(b, t), p(t))

    def test_quadratic2cubic(self):
        start, control, end = 0, 50 + 100j, 100
        cubic = quadratic2cubic(start, control, end)
        for t in np.linspace(0, 1, 7):
            quad = (1 - t)**2*start + 2*(1 - t)*t*control + t**2*end
            self.assertAlmostEqual(bezier_point(cubic, t), quad)


class TestSplitting(unittest.TestCase):
    def test_split_bezier(self):
        np.random.seed(2)
        for t in (0.1, 0.5, 0.77):
            b = random_cubic()
            left, right = split_bezier(b, t)
            self.assertAlmostEqual(left[-1], right[0])
            for s in np.linspace(0, 1, 6):
                self.assertAlmostEqual(bezier_point(left, s),
                                       bezier_point(b, s*t))
                self.assertAlmostEqual(bezier_point(right, s),
                                       bezier_point(b, t + s*(1 - t)))

    def test_crop_bezier(self):
        piece = crop_bezier(ARCH, 0.25, 0.75)
        self.assertAlmostEqual(bezier_point(piece, 0), bezier_point(ARCH, 0.25))
        self.assertAlmostEqual(bezier_point(piece, 1), bezier_point(ARCH, 0.75))
        self.assertAlmostEqual(bezier_point(piece, 0.5),
                               bezier_point(ARCH, 0.5))


class TestBoundingBoxes(unittest.TestCase):
    def test_exact_box(self):
        xmin, xmax, ymin, ymax = bezier_bounding_box(ARCH)
        self.assertAlmostEqual(xmin, 0)
        self.assertAlmostEqual(xmax, 100)
        self.assertAlmostEqual(ymin, 0)
        self.assertAlmostEqual(ymax, 75)

    def test_coarse_box(self):
        self.assertEqual(coarse_bounding_box(ARCH), (0, 100, 0, 100))

    def test_boxes_intersect(self):
        self.assertTrue(boxes_intersect((0, 1, 0, 1), (1, 2, 1, 2)))
        self.assertFalse(boxes_intersect((0, 1, 0, 1), (1.5, 2, 0, 1)))
        self.assertTrue(boxes_intersect((0, 1, 0, 1), (1.5, 2, 0, 1), 0.5))


class TestLength(unittest.TestCase):
    def test_line_length(self):
        self.assertEqual(bezier_length((0, 3 + 4j)), 5)

    def test_straight_cubic(self):
        self.assertAlmostEqual(bezier_length((0, 1, 2, 3)), 3)

    def test_quarter_circle(self):
        self.assertAlmostEqual(bezier_length(QUARTER), pi/2, delta=1e-3)

    def test_zero_length(self):
        self.assertEqual(bezier_length((5j, 5j, 5j, 5j)), 0)

    def test_t_at_length(self):
        self.assertAlmostEqual(bezier_t_at_length((0, 1, 2, 3), 1.5), 0.5,
                               delta=1e-6)
        self.assertEqual(bezier_t_at_length(ARCH, -1), 0)
        self.assertEqual(bezier_t_at_length(ARCH, 1e6), 1)

    def test_t_at_length_inverts_length(self):
        for t in (0.1, 0.4, 0.9):
            s = bezier_length(ARCH, 0, t)
            self.assertAlmostEqual(bezier_t_at_length(ARCH, s), t, delta=0.01)


class TestProjection(unittest.TestCase):
    def test_line_projection(self):
        t, pt, dist = line_project_point((0, 10), 5 + 3j)
        self.assertAlmostEqual(t, 0.5)
        self.assertAlmostEqual(pt, 5)
        self.assertAlmostEqual(dist, 3)

    def test_line_projection_limits(self):
        self.assertEqual(line_project_point((0, 10), -5)[0], 0)
        self.assertAlmostEqual(line_project_point((0, 10), -5, False)[0],
                               -0.5)

    def test_degenerate_line(self):
        t, pt, dist = line_project_point((1j, 1j), 4 + 1j)
        self.assertEqual((t, pt), (0, 1j))
        self.assertAlmostEqual(dist, 3)

    def test_bezier_projection(self):
        t, pt, dist = bezier_project_point((0, 1, 2, 3), 1.5 + 1j)
        self.assertAlmostEqual(t, 0.5, delta=1e-3)
        self.assertAlmostEqual(dist, 1, delta=1e-3)

    def test_bezier_projection_on_curve(self):
        z = bezier_point(ARCH, 0.3)
        t, pt, dist = bezier_project_point(ARCH, z)
        self.assertAlmostEqual(t, 0.3, delta=1e-3)
        self.assertLess(dist, 0.1)


class TestIntersections(unittest.TestCase):
    def test_line_intersection(self):
        self.assertAlmostEqual(line_intersection((0, 10), (5 - 5j, 5 + 5j)), 5)

    def test_parallel_lines(self):
        self.assertIsNone(line_intersection((0, 10), (1j, 10 + 1j)))
        self.assertIsNone(line_intersection((0, 10), (0, 10)))

    def test_extended_lines(self):
        self.assertIsNone(line_intersection((0, 10), (20 - 5j, 20 + 5j)))
        self.assertAlmostEqual(
            line_intersection((0, 10), (20 - 5j, 20 + 5j), extend=True), 20)

    def test_line_overlap(self):
        start, end = line_overlap((0, 10), (5, 15))
        self.assertAlmostEqual(start, 5)
        self.assertAlmostEqual(end, 10)
        self.assertIsNone(line_overlap((0, 10), (10, 20)))
        self.assertIsNone(line_overlap((0, 10), (1j, 10 + 1j)))

    def test_point_on_line(self):
        self.assertTrue(point_on_line(5 + 0.001j, (0, 10)))
        self.assertFalse(point_on_line(5 + 1j, (0, 10)))

    def test_bezier_by_line(self):
        points = sorted(bezier_by_line_intersections(ARCH, (-10 + 50j,
                                                            110 + 50j)),
                        key=lambda z: z.real)
        self.assertEqual(len(points), 2)
        for z in points:
            self.assertAlmostEqual(z.imag, 50)
        self.assertAlmostEqual(points[0].real, 11.51, places=2)
        self.assertAlmostEqual(points[1].real, 88.49, places=2)

    def test_bezier_by_line_misses(self):
        self.assertEqual(
            bezier_by_line_intersections(ARCH, (-10 + 80j, 110 + 80j)), [])
        # the line stops short of the curve
        self.assertEqual(
            bezier_by_line_intersections(ARCH, (40 + 50j, 60 + 50j)), [])

    def test_bezier_intersections(self):
        flat = (-10 + 50j, 30 + 50j, 70 + 50j, 110 + 50j)
        points = sorted(bezier_intersections(ARCH, flat),
                        key=lambda z: z.real)
        self.assertEqual(len(points), 2)
        self.assertAlmostEqual(points[0], 11.51 + 50j, delta=0.2)
        self.assertAlmostEqual(points[1], 88.49 + 50j, delta=0.2)

    def test_bezier_intersections_disjoint(self):
        far = tuple(z + 500 for z in ARCH)
        self.assertEqual(bezier_intersections(ARCH, far), [])


class TestOverlap(unittest.TestCase):
    def test_shared_piece(self):
        piece = crop_bezier(ARCH, 0.25, 0.75)
        shared = bezier_overlap(ARCH, piece)
        self.assertIsNotNone(shared)
        self.assertAlmostEqual(shared[0], bezier_point(ARCH, 0.25), delta=0.1)
        self.assertAlmostEqual(shared[-1], bezier_point(ARCH, 0.75),
                               delta=0.1)

    def test_no_overlap(self):
        other = tuple(z + 5j for z in ARCH)
        self.assertIsNone(bezier_overlap(ARCH, other))

    def test_zero_length(self):
        self.assertIsNone(bezier_overlap(ARCH, (50j, 50j, 50j, 50j)))


if __name__ == '__main__':
    unittest.main()
