"""
Geodesy helpers: great-circle distance, distance labels, randomized search
origins and named debug origins.
"""
