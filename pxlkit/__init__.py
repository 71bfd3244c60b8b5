"""Particles, vertices, typed user records, logging, weak references and SFTP file access."""

__version__ = "0.1.0"