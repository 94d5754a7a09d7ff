"""HR payroll computation service."""

__version__ = "0.1.0"
