"""Financial-quantity engine: currency formatting, growth projections and calendar helpers."""

__version__ = "0.1.0"
