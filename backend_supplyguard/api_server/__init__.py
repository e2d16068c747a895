"""
API server package — HTTP interface to the anomaly engine.

Validates requests, normalizes product histories and delegates scoring to
the analysis engine. Holds no state of its own.
"""
