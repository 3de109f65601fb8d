"""
Kharch Baant - Bootstrap Package

The startup layer of the Kharch Baant shared-expenses app. It decides
whether a user sees the working app, a configuration-error screen or a
crash-recovery screen.

DESIGN PRINCIPLES:
1. Read the environment once, never again
2. Missing configuration is reported, never raised
3. No app without an identity provider key
4. A render failure is contained, never a blank page
"""

__version__ = "1.0.0"
__author__ = "Kharch Baant Team"
