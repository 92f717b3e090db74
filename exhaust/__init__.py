"""Iterate over every possible value of a type; the entry points are in exhaust.api."""

__version__ = "0.2.4"