"""Example: ellipse through a dragged point, refreshed once per frame."""

from geoconic import FreePoint, create_ellipse, nearest_parameter, sample

F0 = FreePoint(-1.0, 4.0, name="F0")
F1 = FreePoint(-1.0, -4.0, name="F1")
C = FreePoint(1.0, 1.0, name="C")


def main() -> None:
    ellipse = create_ellipse(F0, F1, C)
    print(ellipse)

    for step in range(3):
        points = sample(ellipse, 8)
        print(f"\nFrame {step}: major axis {ellipse.major_axis():.6f}, midpoint {ellipse.midpoint}")
        for x, y in points:
            print(f"  ({x:.6f}, {y:.6f})")
        C.move_to(C.x() + 0.5, C.y())

    projection = nearest_parameter(ellipse, (3.0, 0.0))
    print(f"\nClosest to (3, 0): t={projection.t:.6f} at {projection.point}, distance {projection.distance:.6f}")


if __name__ == "__main__":
    main()
