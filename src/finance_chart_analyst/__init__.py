"""finance-chart-analyst: financial Q&A with validated chart output."""

__version__ = '0.1.0'
