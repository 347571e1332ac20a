"""Repository implementations.

``platform`` talks to the managed platform; ``inmemory`` backs tests.
"""
