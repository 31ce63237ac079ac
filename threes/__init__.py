"""
Threes! n-tuple network agents trained by temporal-difference learning.
"""
