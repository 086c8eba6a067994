"""
realm-talks

Build-time content tooling for the Securing the Realm site.
Syncs the YouTube channel feed into the talks collection, normalizes
episodes and splits video descriptions into prose and chapters.
"""

__version__ = "0.1.0"

from realm_talks.config import Config

__all__ = ["Config", "__version__"]
