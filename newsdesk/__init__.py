"""
News admin panel: create, edit and delete articles for the public LP/HP sites.
"""

__version__ = "1.0.0"
