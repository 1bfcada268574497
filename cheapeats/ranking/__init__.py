"""
Ranking core.

Responsibilities:
- Describe how trustworthy price and freshness data is.
- Admit or reject restaurants against hard filters before any scoring.
- Score candidates with time-of-day weights, favorite boost and trust policy.
- Generate "why this pick" reasons and explanation strings.
"""
