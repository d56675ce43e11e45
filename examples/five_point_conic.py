"""Example: general conic through five points and its canonical frame."""

import numpy as np

from geoconic import create_conic

POINTS = [(1.0, 5.0), (1.0, 2.0), (2.0, 0.0), (0.0, 0.0), (-1.0, 5.0)]


def main() -> None:
    conic = create_conic(*POINTS)
    conic.refresh()

    np.set_printoptions(precision=6, suppress=True)
    print("Quadratic form:")
    print(conic.quadraticform)
    print("Eigenvalues:", conic.frame.eigenvalues)
    print("Branch:", conic.branch())
    print("Midpoint:", conic.midpoint)

    for p in POINTS:
        print(f"  residual at {p}: {conic.residual(p):.3e}")

    for phi in np.linspace(0.0, 2.0 * np.pi, 6, endpoint=False):
        x = conic.x(phi, suspend_update=True)
        y = conic.y(phi, suspend_update=True)
        print(f"  phi={phi:.3f}: ({x:.6f}, {y:.6f})")


if __name__ == "__main__":
    main()
