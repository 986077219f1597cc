"""Tests for timezone abbreviation resolvers."""

from glassy.ingest.timezones import MappingResolver, PytzAbbreviationResolver


class TestMappingResolver:
    def test_lookup(self):
        resolver = MappingResolver({"WEST": ("Atlantic/Canary", "Atlantic/Madeira")})
        assert resolver.lookup("WEST") == ["Atlantic/Canary", "Atlantic/Madeira"]

    def test_unknown(self):
        assert MappingResolver({}).lookup("XYZ") == []


class TestPytzAbbreviationResolver:
    def test_summer_and_winter_names(self):
        resolver = PytzAbbreviationResolver(
            zones=["America/Los_Angeles", "Europe/Lisbon"], years=[2026]
        )
        assert resolver.lookup("PDT") == ["America/Los_Angeles"]
        assert resolver.lookup("PST") == ["America/Los_Angeles"]
        assert resolver.lookup("WEST") == ["Europe/Lisbon"]
        assert resolver.lookup("WET") == ["Europe/Lisbon"]

    def test_case_insensitive(self):
        resolver = PytzAbbreviationResolver(zones=["America/Los_Angeles"], years=[2026])
        assert resolver.lookup("pdt") == ["America/Los_Angeles"]

    def test_shared_abbreviation_sorted(self):
        resolver = PytzAbbreviationResolver(
            zones=["Atlantic/Madeira", "Europe/Lisbon", "Atlantic/Canary"], years=[2026]
        )
        assert resolver.lookup("WEST") == [
            "Atlantic/Canary", "Atlantic/Madeira", "Europe/Lisbon",
        ]

    def test_numeric_abbreviations_skipped(self):
        # Asia/Dubai has no letter abbreviation in the zone database
        resolver = PytzAbbreviationResolver(zones=["Asia/Dubai"], years=[2026])
        assert resolver.lookup("+04") == []

    def test_unknown(self):
        resolver = PytzAbbreviationResolver(zones=["America/Los_Angeles"], years=[2026])
        assert resolver.lookup("ZZZ") == []
