"""
southpark-dl: assembles multi-language South Park episodes from per-act downloads.
"""

__version__ = "1.0.0"
