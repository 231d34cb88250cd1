# External dependencies
import unittest
import numpy as np

# Internal dependencies
from pathbool.polytools import (quadratic_roots, cubic_roots, roots01, real,
                                imag)


class Test_polytools(unittest.TestCase):

    def test_quadratic_roots(self):
        self.assertEqual(sorted(quadratic_roots(1, -3, 2)), [1, 2])
        self.assertEqual(quadratic_roots(1, 0, 1), [])
        self.assertEqual(quadratic_roots(1, -2, 1), [1])

    def test_quadratic_roots_linear_fallback(self):
        self.assertEqual(quadratic_roots(0, 2, -4), [2])
        self.assertEqual(quadratic_roots(0, 0, 3), [])

    def test_cubic_roots_three_real(self):
        # (x - 1)(x - 2)(x - 3)
        roots = sorted(cubic_roots(1, -6, 11, -6))
        self.assertEqual(len(roots), 3)
        for r, expected in zip(roots, [1, 2, 3]):
            self.assertAlmostEqual(r, expected)

    def test_cubic_roots_one_real(self):
        # (x - 1)(x^2 + x + 2)
        roots = cubic_roots(1, 0, 1, -2)
        self.assertEqual(len(roots), 1)
        self.assertAlmostEqual(roots[0], 1)

    def test_cubic_roots_negative_root(self):
        # (x + 2)(x^2 + 1)
        roots = cubic_roots(1, 2, 1, 2)
        self.assertEqual(len(roots), 1)
        self.assertAlmostEqual(roots[0], -2)

    def test_cubic_roots_degree_drop(self):
        self.assertEqual(sorted(cubic_roots(0, 1, -3, 2)), [1, 2])

    def test_cubic_roots_match_numpy(self):
        np.random.seed(0)
        for _ in range(20):
            coeffs = np.random.rand(4) - 0.5
            ours = sorted(cubic_roots(*coeffs))
            theirs = sorted(r.real for r in np.roots(coeffs)
                            if abs(r.imag) < 1e-9)
            self.assertEqual(len(ours), len(theirs))
            for r1, r2 in zip(ours, theirs):
                self.assertAlmostEqual(r1, r2, places=6)

    def test_roots01(self):
        self.assertEqual(roots01([-0.5, 0, 0.5, 1, 1.5]), [0, 0.5, 1])

    def test_real_imag(self):
        p = np.poly1d([1 + 2j, 3 - 4j])
        self.assertEqual(list(real(p).coeffs), [1, 3])
        self.assertEqual(list(imag(p).coeffs), [2, -4])
        self.assertEqual(real(1 + 2j), 1)
        self.assertEqual(imag(1 + 2j), 2)


if __name__ == '__main__':
    unittest.main()
