"""
Shape registry - value-like records with derived attributes.
"""

__version__ = "1.0.0"
