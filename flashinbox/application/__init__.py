"""Application layer: use cases orchestrating the domain through repository protocols."""
