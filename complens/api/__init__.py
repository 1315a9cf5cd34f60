"""
CompLens HTTP API
"""
