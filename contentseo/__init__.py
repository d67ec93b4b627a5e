"""
contentseo - sitemap.xml / robots.txt generator for a board-based contents tree.
"""

__version__ = "1.0.0"
