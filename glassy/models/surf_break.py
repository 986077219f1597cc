"""Surf break data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Break:
    id: int
    slug: str
    name: str
    country_name: str


@dataclass(frozen=True)
class BreakSearchResult:
    id: int
    name: str
    country_name: str
