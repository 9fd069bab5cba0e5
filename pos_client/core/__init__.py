"""
Shared plumbing: HTTP client, errors, concurrency and formatting helpers.
"""
