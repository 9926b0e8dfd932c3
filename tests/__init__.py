"""Test package marker for reliable intra-test imports."""
