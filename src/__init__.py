"""
Core package for the supervisory meeting records dashboard.

Submodules provide CSV loading, record normalization, grouping, filtering, and
user interface rendering helpers that are orchestrated by the top-level `app.py`.
"""
