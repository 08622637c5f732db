"""relgen - relational synthetic data generation to CSV."""

__version__ = "0.1.0"
