"""
Backend SupplyGuard — anomaly scoring for supply-chain item histories.

Consumes the stage history of a tracked item (as read from the supply-chain
ledger), runs rule-based anomaly detectors and produces a counterfeit risk
score with explainable anomalies. Keeps per-participant analytics and the
latest result of every flagged item in memory.
"""

__version__ = "0.1.0"
