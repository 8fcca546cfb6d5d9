"""
Browser-driven end-to-end checks for the hellobooks accounting web app.
"""

__version__ = "0.1.0"
