"""
Interface layer package.

Contains the command-line interface.
"""
