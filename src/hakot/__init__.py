"""hakot — driver login and assigned truck schedule resolution."""

__version__ = "0.1.0"
