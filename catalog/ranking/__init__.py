"""
Business ranking engine.

Responsibilities:
- Hold the process-wide ranking tuning values (confidence threshold, global mean).
- Compute the credibility-weighted ("Bayesian") rating of a business.
- Order businesses deterministically by that score.
"""
