"""Report calculators for Sprint Metrics."""
