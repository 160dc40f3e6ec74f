"""
services/ - Query Layer
=======================
Input validation and result shaping on top of the repositories.
"""
