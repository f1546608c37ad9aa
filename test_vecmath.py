#!/usr/bin/env python3
"""
Tests for the small vector helpers.
"""
import pytest

from ringmesh.vecmath import cross, dot, normalize, subtract, triangle_normal


def test_subtract_and_cross():
    assert subtract((3.0, 2.0, 1.0), (1.0, 1.0, 1.0)) == (2.0, 1.0, 0.0)
    assert cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)
    assert cross((0.0, 1.0, 0.0), (1.0, 0.0, 0.0)) == (0.0, 0.0, -1.0)
    assert dot((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == 32.0


def test_normalize():
    assert normalize((3.0, 0.0, 4.0)) == pytest.approx((0.6, 0.0, 0.8))
    assert normalize((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_triangle_normal_follows_right_hand_rule():
    a, b, c = (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    assert triangle_normal(a, b, c) == (0.0, 0.0, 1.0)
    assert triangle_normal(a, c, b) == (0.0, 0.0, -1.0)
    assert triangle_normal(a, a, b) == (0.0, 0.0, 0.0)
