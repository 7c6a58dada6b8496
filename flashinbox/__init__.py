"""flashinbox: a capture inbox that turns saved text, links and PDFs into Anki cards."""

__version__ = "0.1.0"
