"""
In-memory analytics events and their aggregation.
"""
