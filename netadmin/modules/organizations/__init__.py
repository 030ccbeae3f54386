"""Organizations module: scoped organization governance."""
