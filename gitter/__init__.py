"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Gitter client, a product of Garudex Labs

Gitter client - async REST and streaming client for the Gitter API.

Provides signed JSON requests with rate-limit tracking and a persistent
event stream decoder.
"""

from gitter._version import __version__

__all__ = ["__version__"]
