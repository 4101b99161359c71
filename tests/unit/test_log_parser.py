"""
Unit tests for compiler log scraping.

Tests the pure parsing helpers in texpane.contexts.rendering.log_parser.
"""

import pytest

from texpane.contexts.rendering.log_parser import (
    extract_error_line_tokens,
    extract_error_lines,
    parse_latex_diagnostics,
)

PDFLATEX_FAILURE = r"""This is pdfTeX, Version 3.141592653-2.6-1.40.25 (TeX Live 2023) (preloaded format=pdflatex)
 restricted \write18 enabled.
entering extended mode
(./paper.tex
LaTeX2e <2022-11-01> patch level 1
(/usr/share/texlive/texmf-dist/tex/latex/base/article.cls
Document Class: article 2022/07/02 v1.4n Standard LaTeX document class
)
! Undefined control sequence.
l.7 \foo
        {bar}
! LaTeX Error: Environment itemise undefined.

See the LaTeX manual or LaTeX Companion for explanation.
Type  H <return>  for immediate help.
 ...

l.20 \begin{itemise}

LaTeX Warning: Reference `sec:intro' on page 1 undefined on input line 22.

Overfull \hbox (15.0pt too wide) in paragraph at lines 30--31
! Emergency stop.
<*> /tmp/paper.tex

No pages of output.
"""


class TestExtractErrorLineTokens:
    """Tests for extract_error_line_tokens function."""

    @pytest.mark.unit
    def test_tokens_in_order_of_appearance(self):
        output = "l.12 Undefined control sequence\nsome other line\nl.45   \n"
        assert extract_error_line_tokens(output) == ["12", "45"]

    @pytest.mark.unit
    def test_non_digit_after_prefix_is_excluded(self):
        assert extract_error_line_tokens("l.abc\nl.\nl. 3\n") == []

    @pytest.mark.unit
    def test_prefix_must_start_the_line(self):
        output = "error at l.12 somewhere\n  l.13 indented\nxl.14\n"
        assert extract_error_line_tokens(output) == []

    @pytest.mark.unit
    def test_trailing_carriage_return_is_trimmed(self):
        assert extract_error_line_tokens("l.8 \\foo\r\nl.9\r\n") == ["8", "9"]

    @pytest.mark.unit
    def test_empty_output(self):
        assert extract_error_line_tokens("") == []

    @pytest.mark.unit
    def test_real_pdflatex_log(self):
        assert extract_error_line_tokens(PDFLATEX_FAILURE) == ["7", "20"]


class TestExtractErrorLines:
    """Tests for extract_error_lines function."""

    @pytest.mark.unit
    def test_parses_integers(self):
        assert extract_error_lines("l.12 \\foo\nl.45\n") == [12, 45]

    @pytest.mark.unit
    def test_skips_unparseable_tokens(self):
        assert extract_error_lines("l.12abc oops\nl.3 fine\n") == [3]

    @pytest.mark.unit
    def test_repeated_lines_are_kept(self):
        assert extract_error_lines("l.5 a\nl.5 b\n") == [5, 5]


class TestParseLatexDiagnostics:
    """Tests for parse_latex_diagnostics function."""

    @pytest.mark.unit
    def test_errors_and_warnings(self):
        errors, warnings = parse_latex_diagnostics(PDFLATEX_FAILURE)

        assert errors == [
            "Undefined control sequence.",
            "LaTeX Error: Environment itemise undefined.",
            "Emergency stop.",
        ]
        assert "Reference `sec:intro' on page 1 undefined on input line 22." in warnings
        assert "15.0pt too wide" in warnings

    @pytest.mark.unit
    def test_clean_output(self):
        errors, warnings = parse_latex_diagnostics("Output written on paper.pdf (1 page).\n")
        assert errors == []
        assert warnings == []
