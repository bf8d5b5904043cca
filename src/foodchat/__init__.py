"""FoodChat - a multi-seller food ordering chat simulation."""

__version__ = "0.1.0"
