"""Smoothing kernels and physical constants for the SPH fluid model."""

GRAVITY = 5.5
VISCOSITY = 4.5
PRESSURE_CONSTANT = 5.0
REST_DENSITY = 45.0
PARTICLE_MASS = 1.0
SMOOTHING_RADIUS = 0.08
RESTITUTION = 0.1


def kernel_poly6(r: float, h: float) -> float:
    """Unnormalised poly6 kernel used for density: (1 - r²/h²)³ inside the support."""
    if r >= h:
        return 0.0
    term = 1.0 - (r * r) / (h * h)
    return term * term * term


def kernel_spiky_gradient(r: float, h: float) -> float:
    """Unnormalised spiky gradient magnitude used for pressure: (1 - r/h)²."""
    if r >= h:
        return 0.0
    term = 1.0 - r / h
    return term * term


def kernel_viscosity(r: float, h: float) -> float:
    """Linear viscosity kernel: 1 - r/h inside the support, zero beyond it."""
    if r > h:
        return 0.0
    return 1.0 - r / h