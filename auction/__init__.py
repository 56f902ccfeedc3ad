"""
Discrete (call) double auction.

Finds the single clearing price and volume at which the largest
quantity of a security can change hands for a batch of orders.
"""

__version__ = "1.0.0"
