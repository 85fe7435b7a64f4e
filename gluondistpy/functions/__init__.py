"""Low-level numerical kernels.

This subpackage contains the dipole formulas evaluated at every quadrature
node and every Monte Carlo point, compiled with Numba.
"""
