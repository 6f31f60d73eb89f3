"""
Shared utilities used across the interpolation, NCDC and solar packages.
"""
