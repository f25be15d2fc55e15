"""
Random citation graph generation.
"""
