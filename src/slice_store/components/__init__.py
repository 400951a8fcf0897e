"""Concrete slice store components."""
