"""CivicForum: public-data aggregation backend for U.S. Senators."""

__version__ = "0.1.0"
