"""Core Application Layer: the cache storage engine and use-case orchestration.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the FileCacheStorage engine and the command handler.
"""
