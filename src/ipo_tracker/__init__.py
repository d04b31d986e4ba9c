"""IPO tracker backend: cached IPO listings, allocation figures and fund planning."""

__version__ = "0.1.0"
