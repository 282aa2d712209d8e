"""
Presentation layer for the Traffic Analytics module.
"""
