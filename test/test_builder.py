# External dependencies
import unittest
import numpy as np

# Internal dependencies
from pathbool import (PathListBuilder, rect_path_list, circle_path_list,
                      CubicBezier, ContractError)
from pathbool.builder import arc_to_cubics


class TestPathListBuilder(unittest.TestCase):

    def test_lines(self):
        b = PathListBuilder()
        b.move_to(0)
        b.line_to(10)
        b.line_to(10 + 10j)
        b.close()
        self.assertEqual(b.get_paths().d(), 'M 0,0 L 10,0 L 10,10 L 0,0')

    def test_close_at_start_adds_nothing(self):
        b = PathListBuilder()
        b.move_to(0)
        b.line_to(10)
        b.line_to(10j)
        b.line_to(0)
        b.close()
        path = b.get_paths().singular()
        self.assertEqual(len(path), 3)
        self.assertTrue(path.isclosed())

    def test_close_after_arcs_back_to_start(self):
        b = PathListBuilder()
        b.move_to(0)
        b.arc_to(50, 0, 0, 1, 100)
        b.arc_to(50, 0, 0, 1, 0)
        b.close()
        path = b.get_paths().singular()
        self.assertTrue(all(isinstance(seg, CubicBezier) for seg in path))
        self.assertEqual(path.end, 0)

    def test_drawing_after_close(self):
        b = PathListBuilder()
        b.move_to(0)
        b.line_to(10)
        b.line_to(10j)
        b.close()
        b.line_to(20j)
        paths = b.get_paths()
        self.assertEqual(len(paths), 2)
        self.assertEqual(paths[1].d(), 'M 0,0 L 0,20')

    def test_empty_subpaths_skipped(self):
        b = PathListBuilder()
        b.move_to(0)
        b.move_to(5)
        b.line_to(15)
        self.assertEqual(b.get_paths().d(), 'M 5,0 L 15,0')
        self.assertEqual(len(PathListBuilder().get_paths()), 0)

    def test_needs_move_to(self):
        b = PathListBuilder()
        self.assertRaises(ContractError, b.line_to, 10)
        self.assertRaises(ContractError, b.cubic_to, 1, 2, 3)
        self.assertRaises(ContractError, b.quad_to, 1, 2)
        self.assertRaises(ContractError, b.arc_to, 5, 0, 0, 1, 10)
        self.assertRaises(ContractError, b.close)
        # ContractError is also a ValueError
        self.assertRaises(ValueError, b.line_to, 10)

    def test_cubic_and_quadratic(self):
        b = PathListBuilder()
        b.move_to(0)
        b.cubic_to(100j, 100 + 100j, 100)
        b.quad_to(150 - 100j, 200)
        self.assertEqual(b.get_paths().d(),
                         'M 0,0 C 0,100,100,100,100,0 Q 150,-100,200,0')

    def test_with_transform(self):
        translation = [[1, 0, 5], [0, 1, 7], [0, 0, 1]]
        b = PathListBuilder().with_transform(translation)
        b.move_to(0)
        b.line_to(10)
        b.close()
        self.assertEqual(b.get_paths().d(), 'M 5,7 L 15,7 L 5,7')

    def test_with_transform_keeps_quadratics(self):
        b = PathListBuilder().with_transform(np.diag([2, 2, 1]))
        b.move_to(0)
        b.quad_to(5 + 10j, 10)
        self.assertEqual(b.get_paths().d(), 'M 0,0 Q 10,20,20,0')

    def test_with_transform_shape(self):
        b = PathListBuilder()
        self.assertRaises(ValueError, b.with_transform, np.eye(2))
        self.assertRaises(ValueError, b.with_transform, [1, 0, 0])

    def test_semicircle(self):
        for sweep, middle in ((1, 50 - 50j), (0, 50 + 50j)):
            b = PathListBuilder()
            b.move_to(0)
            b.arc_to(50, 0, 0, sweep, 100)
            path = b.get_paths().singular()
            self.assertEqual(len(path), 2)
            self.assertTrue(all(isinstance(seg, CubicBezier) for seg in path))
            self.assertAlmostEqual(path[0].end, middle)
            self.assertEqual(path.end, 100)
            for seg in path:
                self.assertAlmostEqual(abs(seg.point(0.5) - 50), 50,
                                       delta=0.05)

    def test_quarter_arc(self):
        b = PathListBuilder()
        b.move_to(100)
        b.arc_to(50, 0, 0, 0, 50 - 50j)
        path = b.get_paths().singular()
        self.assertEqual(len(path), 1)
        self.assertEqual(path.end, 50 - 50j)
        # stays on the circle around 50
        self.assertAlmostEqual(abs(path[0].point(0.5) - 50), 50, delta=0.05)

    def test_degenerate_arcs(self):
        b = PathListBuilder()
        b.move_to(0)
        b.arc_to(0, 0, 0, 1, 10)
        b.arc_to(5, 0, 0, 1, 10)
        self.assertEqual(b.get_paths().d(), 'M 0,0 L 10,0')

    def test_radii_scaled_up(self):
        cubics = arc_to_cubics(0, 1, 0, 0, 1, 100)
        self.assertEqual(len(cubics), 2)
        self.assertAlmostEqual(cubics[0][2], 50 - 50j)

    def test_elliptical_arc(self):
        cubics = arc_to_cubics(0, 50 + 25j, 0, 0, 1, 100)
        self.assertAlmostEqual(cubics[0][2], 50 - 25j)
        self.assertEqual(cubics[-1][2], 100)


class TestShapes(unittest.TestCase):

    def test_rect(self):
        rect = rect_path_list(0, 0, 10, 20)
        self.assertEqual(rect.d(), 'M 0,0 L 10,0 L 10,20 L 0,20 L 0,0')
        self.assertTrue(rect.singular().is_clockwise())

    def test_circle(self):
        circle = circle_path_list(210 + 200j, 125)
        self.assertEqual(
            circle.d(),
            'M 210,75 C 279.04,75,335,130.96,335,200 '
            'C 335,269.04,279.04,325,210,325 '
            'C 140.96,325,85,269.04,85,200 '
            'C 85,130.96,140.96,75,210,75')
        self.assertTrue(circle.singular().is_clockwise())
        self.assertTrue(circle.singular().isclosed())


if __name__ == '__main__':
    unittest.main()
