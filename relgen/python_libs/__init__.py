"""Runtime libraries for relational synthetic data generation."""
