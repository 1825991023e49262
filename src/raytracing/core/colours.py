"""RGBA colour factors shared by surfaces.

A colour factor multiplies the colour of a ray that interacts with a
surface. Colour factors are plain 4-tuples (R, G, B, A).
"""

Colour = tuple[float, float, float, float]

WHITE: Colour = (1.0, 1.0, 1.0, 1.0)
BLACK: Colour = (0.0, 0.0, 0.0, 1.0)
RED: Colour = (1.0, 0.0, 0.0, 1.0)
GREEN: Colour = (0.0, 1.0, 0.0, 1.0)
BLUE: Colour = (0.0, 0.0, 1.0, 1.0)
GRAY20: Colour = (0.2, 0.2, 0.2, 1.0)
GRAY40: Colour = (0.4, 0.4, 0.4, 1.0)
GRAY60: Colour = (0.6, 0.6, 0.6, 1.0)
GRAY80: Colour = (0.8, 0.8, 0.8, 1.0)

# Approximate transmission coefficient of a typical air-glass interface
ONE_SURFACE_TRANSMISSION_COEFFICIENT = 0.96
# ... and of two such interfaces (e.g. both sides of a thin lens)
TWO_SURFACE_TRANSMISSION_COEFFICIENT = 0.9216


def coefficient_to_colour_factor(coefficient: float) -> Colour:
    """Turn a scalar coefficient into a grey colour factor with alpha 1.

    Args:
        coefficient: The factor applied to each of R, G and B.

    Returns:
        The colour factor (coefficient, coefficient, coefficient, 1).
    """
    c = float(coefficient)
    return (c, c, c, 1.0)


def as_colour(value) -> Colour:
    """Convert a 4-component sequence to a colour tuple of floats.

    Raises:
        ValueError: If the value does not have exactly 4 components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 4:
        raise ValueError(f"Colour factor needs 4 components (RGBA), got {len(components)}")
    return components  # type: ignore[return-value]


ONE_SURFACE_COLOUR_FACTOR = coefficient_to_colour_factor(ONE_SURFACE_TRANSMISSION_COEFFICIENT)
TWO_SURFACE_COLOUR_FACTOR = coefficient_to_colour_factor(TWO_SURFACE_TRANSMISSION_COEFFICIENT)
