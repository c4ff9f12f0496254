"""Serializer implementations for the storage file."""
