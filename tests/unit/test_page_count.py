import pytest

from slipstage.raster.exceptions import PageCountUndetermined
from slipstage.raster.page_count import decode_page_count


class TestDecodePageCount:
    @pytest.mark.parametrize("pages", range(1, 100))
    def test_decodes_repeated_count(self, pages: int) -> None:
        assert decode_page_count(str(pages) * pages) == pages

    def test_ten_pages_is_not_read_as_one(self) -> None:
        assert decode_page_count("10101010101010101010") == 10

    def test_ignores_trailing_newline(self) -> None:
        assert decode_page_count("333\n") == 3

    def test_reads_first_line_only(self) -> None:
        assert decode_page_count("22\nwarning text\n") == 2


class TestDecodePageCountFailures:
    def test_rejects_non_self_describing_output(self) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count("1234")

    def test_rejects_empty_output(self) -> None:
        with pytest.raises(PageCountUndetermined, match="empty"):
            decode_page_count("")

    def test_rejects_whitespace_output(self) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count("  \n ")

    def test_rejects_truncated_output(self) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count("33")

    def test_rejects_zero(self) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count("0")

    def test_rejects_non_numeric_output(self) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count("abc")

    @pytest.mark.parametrize("output", ["²", "¹", "1²"])
    def test_rejects_non_ascii_digits(self, output: str) -> None:
        with pytest.raises(PageCountUndetermined):
            decode_page_count(output)
