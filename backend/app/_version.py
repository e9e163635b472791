"""
Version import for the TestForge backend.

Single source of truth: testforge/_version.py
"""

from testforge._version import __version__, __release_date__
