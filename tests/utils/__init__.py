"""Test utilities for PAR CC Status."""
