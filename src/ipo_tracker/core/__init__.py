"""Core utilities: exceptions, clock, number helpers."""
