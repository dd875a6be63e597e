"""Archive newsletter e-mails as standalone HTML pages."""

__version__ = "0.1.0"
