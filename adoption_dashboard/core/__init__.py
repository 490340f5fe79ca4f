"""
Core pipeline pieces: models, coercion, filters and aggregation.
"""
