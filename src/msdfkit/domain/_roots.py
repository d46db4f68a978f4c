"""Internal polynomial root solvers.

This is an internal module containing the closed-form solvers used by the
edge primitives. Not intended for public use.

Quadratic Bezier closest-point queries reduce to a cubic, which is solved in
closed form here. Cubic Bezier queries reduce to a quintic and are refined
numerically in the edge module; the constants below bound that search.
"""

import math

# Starting parameters tried when refining cubic Bezier closest points
CUBIC_SEARCH_STARTS = 8
# Newton steps per starting parameter
CUBIC_SEARCH_STEPS = 8
# Newton iteration stops once the step is below this
ROOT_TOLERANCE = 1e-12
# Starting angles tried when refining closest points on non-circular arcs
ARC_SEARCH_STARTS = 16
ARC_SEARCH_STEPS = 12

# Leading coefficients this much smaller than the next are treated as zero
_DEGREE_DROP_RATIO = 1e12


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Find real roots of ``a*x^2 + b*x + c = 0``.

    Args:
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant coefficient

    Returns:
        Real roots (possibly empty). An identically zero polynomial has no
        reported roots.

    Examples:
        >>> sorted(solve_quadratic(1.0, -3.0, 2.0))
        [1.0, 2.0]
    """
    if a == 0 or abs(b) > _DEGREE_DROP_RATIO * abs(a):
        if b == 0:
            return []
        return [-c / b]

    discriminant = b * b - 4 * a * c
    if discriminant > 0:
        root = math.sqrt(discriminant)
        return [(-b + root) / (2 * a), (-b - root) / (2 * a)]
    if discriminant == 0:
        return [-b / (2 * a)]
    return []


def _solve_normed_cubic(a: float, b: float, c: float) -> list[float]:
    """Real roots of ``x^3 + a*x^2 + b*x + c``."""
    a2 = a * a
    q = (a2 - 3 * b) / 9
    r = (a * (2 * a2 - 9 * b) + 27 * c) / 54
    r2 = r * r
    q3 = q * q * q
    a /= 3

    if r2 < q3:
        # Three real roots, trigonometric form
        t = max(-1.0, min(1.0, r / math.sqrt(q3)))
        t = math.acos(t)
        m = -2 * math.sqrt(q)
        return [
            m * math.cos(t / 3) - a,
            m * math.cos((t + 2 * math.pi) / 3) - a,
            m * math.cos((t - 2 * math.pi) / 3) - a,
        ]

    u = -math.copysign(1.0, r) * (abs(r) + math.sqrt(r2 - q3)) ** (1 / 3)
    v = q / u if u != 0 else 0.0
    roots = [u + v - a]
    if u == v or abs(u - v) < 1e-12 * abs(u + v):
        roots.append(-0.5 * (u + v) - a)
    return roots


def solve_cubic(a: float, b: float, c: float, d: float) -> list[float]:
    """Find real roots of ``a*x^3 + b*x^2 + c*x + d = 0``.

    Falls back to the quadratic solver when the cubic term is negligible.

    Examples:
        >>> sorted(round(r, 9) for r in solve_cubic(1.0, -12.0, 39.0, -28.0))
        [1.0, 4.0, 7.0]
    """
    if a != 0:
        bn = b / a
        if abs(bn) < 1e6:
            return _solve_normed_cubic(bn, c / a, d / a)
    return solve_quadratic(b, c, d)


def newton_refine(
    t: float,
    f,
    df,
    steps: int,
    lower: float | None = None,
    upper: float | None = None,
) -> float:
    """Refine a root estimate of ``f`` with bounded Newton iteration.

    Args:
        t: Initial estimate
        f: Function whose root is wanted
        df: Derivative of ``f``
        steps: Maximum number of iterations
        lower: Optional lower clamp for the estimate
        upper: Optional upper clamp for the estimate

    Returns:
        Refined estimate; returns early when the derivative vanishes or the
        step falls below ``ROOT_TOLERANCE``.
    """
    for _ in range(steps):
        slope = df(t)
        if slope == 0:
            break
        step = f(t) / slope
        t -= step
        if lower is not None and t < lower:
            t = lower
        if upper is not None and t > upper:
            t = upper
        if abs(step) < ROOT_TOLERANCE:
            break
    return t
