"""Moon phase disc renderer.

Produces a 100x100 SVG of the moon: a dark disc with a lit crescent, or a
lit disc with a dark crescent, separated by an elliptical terminator.

Coordinate system:
  disc centre (50, 50), radius 40; SVG y grows downward.
  The lit limb is on the right while waxing, on the left while waning.
"""

import math

from stargazer.renderers.svg import Circle, Path, PathBuilder, SvgDocument

SIZE = 100
RADIUS = 40
LIGHT = "white"
DARK = "black"
_RIM = "#444"

# How close a phase must be to 0, 1/4, 1/2, 3/4 to be drawn as the exact shape
_SNAP = 0.01


def _disc(fill: str) -> Circle:
    c = SIZE / 2
    return Circle(cx=c, cy=c, r=RADIUS, fill=fill, stroke=_RIM, stroke_width=1)


def _half_disc(right: bool) -> Path:
    c = SIZE / 2
    d = (
        PathBuilder()
        .move_to(c, c - RADIUS)
        .arc_to(RADIUS, RADIUS, 0, 1 if right else 0, c, c + RADIUS)
        .line_to(c, c - RADIUS)
        .close()
        .build()
    )
    return Path(d=d, fill=LIGHT)


def _lune(curve: float, terminator_sweep: int, fill: str) -> Path:
    """Region between the terminator ellipse and one limb of the disc."""
    c = SIZE / 2
    d = (
        PathBuilder()
        .move_to(c, c - RADIUS)
        .arc_to(curve, RADIUS, 0, terminator_sweep, c, c + RADIUS)
        .arc_to(RADIUS, RADIUS, 0, 1 - terminator_sweep, c, c - RADIUS)
        .build()
    )
    return Path(d=d, fill=fill)


def render_moon_phase_svg(phase: float) -> str:
    """Render the moon's lit shape for a phase fraction.

    Args:
        phase: Fraction of the synodic month, 0 = new, 0.5 = full. Values
            outside [0, 1) are wrapped.

    Returns:
        Self-contained SVG markup.

    Raises:
        ValueError: If `phase` is NaN or infinite.
    """
    if not math.isfinite(phase):
        raise ValueError(f"phase must be finite, got {phase!r}")
    phase = phase % 1.0

    doc = SvgDocument(SIZE, SIZE)

    if phase < _SNAP or abs(phase - 1) < _SNAP:
        return doc.add(_disc(DARK)).render()
    if abs(phase - 0.5) < _SNAP:
        return doc.add(_disc(LIGHT)).render()
    if abs(phase - 0.25) < _SNAP:
        return doc.add(_disc(DARK), _half_disc(right=True)).render()
    if abs(phase - 0.75) < _SNAP:
        return doc.add(_disc(DARK), _half_disc(right=False)).render()

    # Horizontal semi-axis of the terminator ellipse
    curve = abs(math.sin(2 * math.pi * phase)) * RADIUS

    if phase < 0.25:  # waxing crescent
        doc.add(_disc(DARK), _lune(curve, 1, LIGHT))
    elif phase < 0.5:  # waxing gibbous
        doc.add(_disc(LIGHT), _lune(curve, 0, DARK))
    elif phase < 0.75:  # waning gibbous
        doc.add(_disc(LIGHT), _lune(curve, 1, DARK))
    else:  # waning crescent
        doc.add(_disc(DARK), _lune(curve, 0, LIGHT))
    return doc.render()
