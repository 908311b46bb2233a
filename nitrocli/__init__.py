"""Command-line access to Nitrokey Storage devices."""

__version__ = '0.1.0'
