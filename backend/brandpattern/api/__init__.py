"""HTTP surface consumed by the pattern UI."""
