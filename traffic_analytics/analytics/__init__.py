"""
Traffic analytics bounded context.
"""
