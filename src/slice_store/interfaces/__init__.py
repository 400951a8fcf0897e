"""Protocol definitions for slice store components."""
