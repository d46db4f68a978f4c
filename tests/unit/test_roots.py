"""Unit tests for the polynomial root solvers."""

import math

import pytest

from msdfkit.domain._roots import newton_refine, solve_cubic, solve_quadratic


class TestSolveQuadratic:
    """Tests for solve_quadratic."""

    def test_two_roots(self):
        assert sorted(solve_quadratic(1.0, -3.0, 2.0)) == [1.0, 2.0]

    def test_double_root(self):
        assert solve_quadratic(1.0, -2.0, 1.0) == [1.0]

    def test_no_real_roots(self):
        assert solve_quadratic(1.0, 0.0, 1.0) == []

    def test_linear_fallback(self):
        assert solve_quadratic(0.0, 2.0, -4.0) == [2.0]

    def test_constant_has_no_roots(self):
        assert solve_quadratic(0.0, 0.0, 1.0) == []


class TestSolveCubic:
    """Tests for solve_cubic."""

    def test_three_real_roots(self):
        roots = sorted(solve_cubic(1.0, -12.0, 39.0, -28.0))
        assert roots == pytest.approx([1.0, 4.0, 7.0])

    def test_single_real_root(self):
        roots = solve_cubic(1.0, 0.0, 0.0, -8.0)
        assert roots == pytest.approx([2.0])

    def test_triple_root(self):
        roots = solve_cubic(1.0, -3.0, 3.0, -1.0)
        assert roots
        assert all(r == pytest.approx(1.0) for r in roots)

    def test_falls_back_to_quadratic(self):
        roots = sorted(solve_cubic(0.0, 1.0, -3.0, 2.0))
        assert roots == [1.0, 2.0]

    def test_roots_satisfy_polynomial(self):
        coefficients = (2.0, -1.0, -7.0, 3.0)
        roots = solve_cubic(*coefficients)
        a, b, c, d = coefficients
        assert len(roots) == 3
        for r in roots:
            assert a * r**3 + b * r**2 + c * r + d == pytest.approx(0.0, abs=1e-9)


class TestNewtonRefine:
    """Tests for bounded Newton iteration."""

    def test_converges(self):
        root = newton_refine(1.0, lambda x: x * x - 2.0, lambda x: 2.0 * x, steps=20)
        assert root == pytest.approx(math.sqrt(2.0))

    def test_respects_bounds(self):
        root = newton_refine(0.5, lambda x: x - 5.0, lambda x: 1.0, steps=5, lower=0.0, upper=1.0)
        assert root == 1.0

    def test_stops_on_flat_derivative(self):
        assert newton_refine(0.25, lambda x: 1.0, lambda x: 0.0, steps=5) == 0.25
