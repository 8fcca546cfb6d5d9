"""
pytest integration.
"""
