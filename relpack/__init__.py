"""relpack: versioned multi-target release packaging for compiled programs."""

__version__ = "0.1.0"
