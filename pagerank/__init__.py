"""
PageRank over citation graphs read from edge-list files.
"""
