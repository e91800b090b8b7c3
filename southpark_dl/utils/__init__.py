"""
Utility helpers shared across layers: file naming and human-readable formatting.
"""
