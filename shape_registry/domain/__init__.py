"""
Domain layer - Contains entities, value objects, and domain functions.
This layer is independent of external concerns and holds the record model.
"""
