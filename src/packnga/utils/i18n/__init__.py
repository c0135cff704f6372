"""
Gettext catalog handling.

This package drives the external tools maintaining the .pot template and
the per-language .po files of the reference.
"""
