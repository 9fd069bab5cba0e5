"""
Sales reports and dashboards.
"""
