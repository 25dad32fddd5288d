import re

import pytest

from planning_scraper.resolver.naming import MAX_TITLE_LENGTH, clean_title, derive_filename

VIEW_URL = "https://portal.example/iDocsWebDPSS/ViewFiles.aspx?docid=4821937&format=djvu"


class TestCleanTitle:
    def test_replaces_invalid_characters(self) -> None:
        assert clean_title('a<b>c:d"e/f\\g|h?i*j') == "a_b_c_d_e_f_g_h_i_j"

    def test_collapses_whitespace_runs(self) -> None:
        assert clean_title("Site   Layout\tPlan\nRev A") == "Site_Layout_Plan_Rev_A"

    def test_strips_surrounding_whitespace(self) -> None:
        assert clean_title("  Cover Letter  ") == "Cover_Letter"

    def test_preserves_case(self) -> None:
        assert clean_title("EIAR Volume II") == "EIAR_Volume_II"

    def test_truncates_to_limit(self) -> None:
        assert len(clean_title("x" * 250)) == MAX_TITLE_LENGTH

    @pytest.mark.parametrize(
        "title",
        [
            "Planning Application Form",
            'Drawing: "North" / "South" elevations?',
            "   padded\t\ttitle   ",
            "y" * 180 + " tail",
        ],
    )
    def test_is_idempotent(self, title: str) -> None:
        once = clean_title(title)
        assert clean_title(once) == once


class TestDeriveFilename:
    def test_docid_and_title(self) -> None:
        assert derive_filename(VIEW_URL, "Planning Application Form") == (
            "4821937_Planning_Application_Form.pdf"
        )

    def test_is_deterministic(self) -> None:
        first = derive_filename(VIEW_URL, "Site Notice")
        second = derive_filename(VIEW_URL, "Site Notice")
        assert first == second

    def test_without_title(self) -> None:
        assert derive_filename(VIEW_URL, "") == "document_4821937.pdf"

    def test_blank_title_counts_as_missing(self) -> None:
        assert derive_filename(VIEW_URL, "   ") == "document_4821937.pdf"

    def test_djvu_title_extension_becomes_pdf(self) -> None:
        assert derive_filename(VIEW_URL, "scan.djvu") == "4821937_scan.pdf"

    def test_pdf_title_extension_not_doubled(self) -> None:
        assert derive_filename(VIEW_URL, "report.PDF") == "4821937_report.pdf"

    def test_length_bounded(self) -> None:
        filename = derive_filename(VIEW_URL, "z" * 400)
        stem = filename.removeprefix("4821937_").removesuffix(".pdf")
        assert len(stem) <= MAX_TITLE_LENGTH
        assert filename.endswith(".pdf")

    def test_fallback_without_docid(self) -> None:
        filename = derive_filename("https://portal.example/ViewFiles.aspx?id=abc", "Title")
        assert re.fullmatch(r"document_\d+_[a-z0-9]{9}\.pdf", filename)

    def test_fallback_names_are_unique(self) -> None:
        url = "https://portal.example/ViewFiles.aspx"
        names = {derive_filename(url) for _ in range(20)}
        assert len(names) == 20
