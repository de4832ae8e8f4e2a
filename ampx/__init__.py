"""
Amplify backend command line tooling
"""

__version__ = "1.0.0"
