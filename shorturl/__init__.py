"""Short URL registry service: numeric short codes for URLs, and redirects back."""

__version__ = "1.0.0"
