"""Numerical core: normal distribution, time basis, pricer, curve, solver."""
