"""
Application de gestion des inscriptions de candidats
"""

__version__ = "1.0.0"
