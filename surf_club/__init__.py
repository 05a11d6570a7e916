"""
Session Surf Club API - log surf sessions and share them with other surfers.
"""
