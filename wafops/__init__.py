"""Transformations and operators for web application firewall rules."""

__version__ = "0.1.0"