"""Work Tracker package.

This package is organized by feature modules (punches, accounting, history, ...)
with a thin Flask controller layer over service and repository layers.
"""
