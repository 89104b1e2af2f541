"""wavescribe test suite."""
