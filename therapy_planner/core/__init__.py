"""Core domain logic: exceptions and schedule algorithms."""
