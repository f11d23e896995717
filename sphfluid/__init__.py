"""Two-dimensional SPH fluid simulation with an interactive pygame viewer."""

__version__ = "0.1.0"
__all__ = ["__version__"]