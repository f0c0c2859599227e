"""
itemkeeper - request pipeline and team-based access control for item APIs.
"""

__version__ = "0.1.0"
