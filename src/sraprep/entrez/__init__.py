"""Clients that return SRA runinfo for a BioProject."""

from .client import EDirectClient, EutilsClient, make_client

__all__ = ['EDirectClient', 'EutilsClient', 'make_client']
