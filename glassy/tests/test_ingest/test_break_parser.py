"""Tests for search payload, redirect and break page parsing."""

import pytest

from glassy.ingest.break_parser import (
    is_break_id,
    parse_break_redirect,
    parse_search_payload,
    scrape_break,
)
from glassy.ingest.errors import BreakNotFound, StructureNotFound, UnexpectedFormat
from glassy.ingest.tree import parse_html
from glassy.models.surf_break import BreakSearchResult


class TestParseSearchPayload:
    def test_breaks_only(self):
        body = "[['123','Break A','Country'],['re45','Region','Country'],['co9','Country','Country']]"
        assert parse_search_payload(body) == [
            BreakSearchResult(id=123, name="Break A", country_name="Country"),
        ]

    def test_non_ascii_digit_ids_dropped(self):
        body = "[['²','Break','C'],['١٢','Other','C'],['42','Real','C']]"
        assert parse_search_payload(body) == [
            BreakSearchResult(id=42, name="Real", country_name="C"),
        ]

    def test_order_preserved(self):
        body = "[['2','Pipeline','USA - Hawaii'],['1','Pipeline Beach','Australia']]"
        assert [r.id for r in parse_search_payload(body)] == [2, 1]

    def test_empty(self):
        assert parse_search_payload("[]") == []

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "{'a':'b'}",
            "[['1','Only two']]",
            "[[1,'Break','Country']]",
            "['1','Break','Country']",
        ],
    )
    def test_malformed(self, body: str):
        with pytest.raises(UnexpectedFormat):
            parse_search_payload(body)


class TestParseBreakRedirect:
    def test_relative(self):
        assert parse_break_redirect("/breaks/Pipeline_1/forecasts/latest") == "Pipeline_1"

    def test_absolute(self):
        location = "https://www.surf-forecast.com/breaks/Ocean-Beach_1/forecasts/latest/six_day"
        assert parse_break_redirect(location) == "Ocean-Beach_1"

    def test_outside_breaks(self):
        with pytest.raises(BreakNotFound):
            parse_break_redirect("/")

    @pytest.mark.parametrize("location", ["/breaks/Pipeline_1", "/breaks//forecasts/latest"])
    def test_unexpected_format(self, location: str):
        with pytest.raises(UnexpectedFormat):
            parse_break_redirect(location)


class TestScrapeBreak:
    def test_names(self, break_html: str):
        assert scrape_break(parse_html(break_html)) == ("Test Break", "USA - California")

    def test_missing_navigation(self):
        with pytest.raises(StructureNotFound, match="navigation"):
            scrape_break(parse_html("<html><body></body></html>"))

    def test_no_selected_break(self, break_html: str):
        html = break_html.replace(
            '<option value="Test-Break" selected="selected">', '<option value="Test-Break">'
        )
        with pytest.raises(StructureNotFound, match="surf break name node"):
            scrape_break(parse_html(html))


class TestIsBreakId:
    @pytest.mark.parametrize("text", ["1", "123", "007"])
    def test_ascii_digits(self, text: str):
        assert is_break_id(text)

    @pytest.mark.parametrize("text", ["", "re45", "²", "١٢", "1.5", "-1", " 1"])
    def test_rejected(self, text: str):
        assert not is_break_id(text)
