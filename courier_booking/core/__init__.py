"""
Core domain: enums, exceptions, models and collaborator ports.
"""
