"""BizBooks: tenant-scoped document lists for small-business accounting."""

__version__ = "0.1.0"
