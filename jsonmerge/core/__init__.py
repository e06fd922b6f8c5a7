"""
Core domain logic: models, schema inference, validation and record transforms.
"""
