"""Filename utilities for stored uploads."""
import re
from itertools import count
from pathlib import PurePosixPath
from typing import Iterator, Optional, Tuple


PDF_MEDIA_TYPE = "application/pdf"

_WHITESPACE = re.compile(r"\s+")


class FileNames:
    """Sanitize uploaded names and generate collision-free alternatives."""

    @staticmethod
    def is_pdf(filename: Optional[str], content_type: Optional[str]) -> bool:
        """Check the declared media type or, failing that, the extension."""
        if content_type == PDF_MEDIA_TYPE:
            return True
        return bool(filename) and filename.lower().endswith(".pdf")

    @staticmethod
    def normalize(filename: str) -> str:
        """
        Normalize a client-supplied filename for storage.

        Any directory part is dropped (browsers on Windows may send
        backslash paths) and each whitespace run becomes a single underscore.

        Args:
            filename: Name as sent by the client

        Returns:
            Name safe to place in the upload directory
        """
        name = PurePosixPath(filename.replace("\\", "/")).name
        return _WHITESPACE.sub("_", name)

    @staticmethod
    def split(filename: str) -> Tuple[str, str]:
        """Split into (base, extension) on the last suffix only."""
        suffix = PurePosixPath(filename).suffix
        if not suffix:
            return filename, ""
        return filename[: -len(suffix)], suffix

    @staticmethod
    def candidates(filename: str) -> Iterator[str]:
        """
        Yield the name itself, then ``base(1).ext``, ``base(2).ext``, ...

        The sequence is unbounded; callers stop at the first free name.
        """
        yield filename
        base, ext = FileNames.split(filename)
        for n in count(1):
            yield f"{base}({n}){ext}"
