"""
Core package for the submissions admin dashboard.

Submodules provide configuration, submission loading, filtering and export,
and user interface rendering helpers that are orchestrated by the top-level
`app.py`.
"""
