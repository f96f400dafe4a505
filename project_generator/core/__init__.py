"""
Core infrastructure: configuration, logging, errors and security.
"""
