"""Command-line interface for the interpolator."""
