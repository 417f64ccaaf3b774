from itertools import islice

import pytest

from docportal.utils.filenames import FileNames


@pytest.mark.parametrize(
    "filename,content_type,expected",
    [
        ("a.pdf", "application/pdf", True),
        ("a.PdF", "application/octet-stream", True),
        ("a", "application/pdf", True),
        ("a.txt", "text/plain", False),
        ("a.pdf.txt", "text/plain", False),
        ("", None, False),
    ],
)
def test_is_pdf(filename, content_type, expected):
    assert FileNames.is_pdf(filename, content_type) is expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("report.pdf", "report.pdf"),
        ("my report.pdf", "my_report.pdf"),
        ("my \t  report.pdf", "my_report.pdf"),
        ("dir/sub/report.pdf", "report.pdf"),
        ("C:\\Users\\me\\my report.pdf", "my_report.pdf"),
    ],
)
def test_normalize(raw, expected):
    assert FileNames.normalize(raw) == expected


def test_split_uses_last_suffix():
    assert FileNames.split("archive.tar.pdf") == ("archive.tar", ".pdf")
    assert FileNames.split("README") == ("README", "")


def test_candidates():
    assert list(islice(FileNames.candidates("report.pdf"), 4)) == [
        "report.pdf",
        "report(1).pdf",
        "report(2).pdf",
        "report(3).pdf",
    ]
    assert list(islice(FileNames.candidates("notes"), 2)) == ["notes", "notes(1)"]

