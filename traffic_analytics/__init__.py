"""
Traffic analytics engine: ingestion, aggregation, window search,
forecasting and reporting over time-stamped vehicle counts.
"""
