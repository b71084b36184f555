"""
Core utilities shared across the package.

Configuration lives here so that services and repositories never read
os.environ directly.
"""
