"""Vehicle service booking engine."""
