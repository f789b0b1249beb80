"""Tests for ExtensionResolver and the MIME table."""

import pytest

from core.extension import ExtensionResolver, final_filename
from core.mime_table import extension_for, normalize_mime
from core.request_types import FetchedFile


def _fetched(url: str, content_type: str | None = None, disposition: str | None = None) -> FetchedFile:
    return FetchedFile(
        content=b"data",
        source_url=url,
        content_type=content_type,
        content_disposition=disposition,
    )


class TestMimeTable:
    def test_normalize_strips_parameters(self) -> None:
        assert normalize_mime("text/csv; charset=utf-8") == "text/csv"
        assert normalize_mime("  image/png ") == "image/png"
        assert normalize_mime(None) == ""

    def test_known_and_unknown_types(self) -> None:
        assert extension_for("application/pdf") == "pdf"
        assert extension_for("image/svg+xml") == "svg"
        assert extension_for("application/x-unknown") is None


class TestExtensionResolver:
    """Fallback chain: MIME, Content-Disposition, URL path, query parameter."""

    resolver = ExtensionResolver()

    def test_png_content_type(self) -> None:
        fetched = _fetched("https://x.com/download", "image/png")
        assert self.resolver.resolve(fetched, fetched.source_url) == "png"

    def test_content_type_parameters_ignored(self) -> None:
        fetched = _fetched("https://x.com/download", "text/csv; charset=utf-8")
        assert self.resolver.resolve(fetched, fetched.source_url) == "csv"

    def test_content_type_beats_url(self) -> None:
        fetched = _fetched("https://x.com/file.txt", "application/json")
        assert self.resolver.resolve(fetched, fetched.source_url) == "json"

    def test_octet_stream_uses_disposition(self) -> None:
        fetched = _fetched(
            "https://x.com/download",
            "application/octet-stream",
            'attachment; filename="report.pdf"',
        )
        assert self.resolver.resolve(fetched, fetched.source_url) == "pdf"

    def test_application_binary_is_generic(self) -> None:
        fetched = _fetched("https://x.com/download", "application/binary", "attachment; filename=Data.XLSX")
        assert self.resolver.resolve(fetched, fetched.source_url) == "xlsx"

    def test_disposition_single_quotes_and_trailing_params(self) -> None:
        fetched = _fetched("https://x.com/download", None, "attachment; filename='scan.tiff'; size=10")
        assert self.resolver.resolve(fetched, fetched.source_url) == "tiff"

    def test_disposition_without_dot_falls_through_to_url(self) -> None:
        fetched = _fetched("https://x.com/files/photo.JPG", None, 'attachment; filename="report"')
        assert self.resolver.resolve(fetched, fetched.source_url) == "jpg"

    def test_url_path_extension(self) -> None:
        fetched = _fetched("https://x.com/file.csv?x=1")
        assert self.resolver.resolve(fetched, fetched.source_url) == "csv"

    def test_dot_in_directory_is_not_an_extension(self) -> None:
        fetched = _fetched("https://x.com/v1.2/export")
        assert self.resolver.resolve(fetched, fetched.source_url) == ""

    def test_query_format_parameter(self) -> None:
        fetched = _fetched("https://x.com/export?format=xlsx")
        assert self.resolver.resolve(fetched, fetched.source_url) == "xlsx"

    def test_query_parameter_priority(self) -> None:
        fetched = _fetched("https://docs.example.com/export?ext=txt&exportFormat=PDF&format=csv")
        assert self.resolver.resolve(fetched, fetched.source_url) == "pdf"

    def test_present_but_empty_query_parameter_wins(self) -> None:
        fetched = _fetched("https://x.com/export?format=&ext=csv")
        assert self.resolver.resolve(fetched, fetched.source_url) == ""

    def test_unknown_concrete_type_uses_fallbacks(self) -> None:
        fetched = _fetched("https://x.com/archive.tar", "application/x-tar")
        assert self.resolver.resolve(fetched, fetched.source_url) == "tar"

    def test_octet_stream_with_no_other_signal(self) -> None:
        fetched = _fetched("https://x.com/", "application/octet-stream")
        assert self.resolver.resolve(fetched, fetched.source_url) == ""

    @pytest.mark.parametrize("url", ["https://x.com", "https://x.com/", "https://x.com/download"])
    def test_no_signal_at_all(self, url: str) -> None:
        fetched = _fetched(url)
        assert self.resolver.resolve(fetched, url) == ""


class TestFinalFilename:
    def test_with_extension(self) -> None:
        assert final_filename("file", "pdf") == "file.pdf"

    def test_without_extension(self) -> None:
        assert final_filename("attachment", "") == "attachment"
