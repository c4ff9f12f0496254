"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (disk, serialization formats,
configuration, console) by implementing the interfaces defined in the
domain layer.
"""
