"""Document portal: upload, list, download and delete PDF files."""

__version__ = "0.1.0"
