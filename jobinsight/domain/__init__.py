"""
Domain layer package.
"""
