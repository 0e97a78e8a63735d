"""newsdesk: news reader core with local favorites and paginated screens."""

__version__ = "0.1.0"
