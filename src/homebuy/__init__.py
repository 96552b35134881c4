# This project was developed with assistance from AI tools.
"""Home-purchase affordability calculator."""

__version__ = "0.1.0"
