"""prefer-arrow: find functions that can become arrow functions and rewrite them."""

__version__ = "1.0.0"
