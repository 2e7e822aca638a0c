"""Edit SSH client config hosts, tags and port forwards."""

__version__ = "0.1.0"
