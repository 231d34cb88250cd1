"""Vector algebra on points given as complex numbers.

The real part is the x coordinate and the imaginary part the y
coordinate.  Addition, subtraction and scaling are just complex
arithmetic; this module holds the remaining operations."""

from math import atan2, sqrt


def dot(u, v):
    return u.real*v.real + u.imag*v.imag


def cross(u, v):
    """z-component of the cross product of u and v."""
    return u.real*v.imag - u.imag*v.real


def length(v):
    return sqrt(v.real*v.real + v.imag*v.imag)


def square_distance(z1, z2):
    d = z2 - z1
    return d.real*d.real + d.imag*d.imag


def normalize(v):
    """returns v scaled to unit length.  The zero vector stays zero rather
    than turning into NaN."""
    l = length(v)
    if l == 0:
        return 0j
    return v/l


def angle(v):
    """returns the angle of v in radians, in (-pi, pi]."""
    return atan2(v.imag, v.real)


def tangent_to_normal(v):
    """returns v rotated a quarter turn, (x, y) -> (-y, x)."""
    return complex(-v.imag, v.real)
