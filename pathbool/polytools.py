"""This submodule contains closed-form root finders for the low degree
polynomials that show up when working with cubic Bezier curves."""

from math import acos, cos, pi, sqrt, copysign
import numpy as np

# Internal dependencies
from .misctools import is_same, clamp


def quadratic_roots(a, b, c):
    """Returns the real roots of a*x**2 + b*x + c.
    Degrades to the linear case when a vanishes."""
    if is_same(a, 0):
        if is_same(b, 0):
            return []
        return [-c/b]
    d = b*b - 4*a*c
    if d < 0:
        return []
    elif d == 0:
        return [-b/(2*a)]
    sqd = sqrt(d)
    return [(-b + sqd)/(2*a), (-b - sqd)/(2*a)]


def cubic_roots(a, b, c, d):
    """Returns the real roots of a*x**3 + b*x**2 + c*x + d.

    Uses the trigonometric form when there are three real roots and
    Cardano's formula when there is one.  Falls back to `quadratic_roots`
    when the leading coefficient vanishes."""
    if is_same(a, 0):
        return quadratic_roots(b, c, d)

    bq = b/a
    cq = c/a
    dq = d/a

    q = (3*cq - bq*bq)/9
    r = (9*bq*cq - 27*dq - 2*bq*bq*bq)/54
    q3 = q*q*q
    discriminant = q3 + r*r
    shift = bq/3

    if discriminant >= 0:
        # one real root (and a complex conjugate pair)
        dsqrt = sqrt(discriminant)
        s = copysign(abs(r + dsqrt)**(1/3), r + dsqrt)
        t = copysign(abs(r - dsqrt)**(1/3), r - dsqrt)
        return [-shift + s + t]

    # three distinct real roots
    th = acos(clamp(r/sqrt(-q3), -1, 1))
    qs = 2*sqrt(-q)
    return [qs*cos(th/3) - shift,
            qs*cos((th + 2*pi)/3) - shift,
            qs*cos((th + 4*pi)/3) - shift]


def roots01(roots):
    """Filters out the roots lying outside [0, 1]."""
    return [r for r in roots if 0 <= r <= 1]


def real(z):
    try:
        return np.poly1d(z.coeffs.real)
    except AttributeError:
        return z.real


def imag(z):
    try:
        return np.poly1d(z.coeffs.imag)
    except AttributeError:
        return z.imag
