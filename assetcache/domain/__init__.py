"""Domain Layer: value objects, entities, exceptions and the interfaces (ports)
the core depends on.
"""
