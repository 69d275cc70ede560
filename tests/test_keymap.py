"""Unit tests for the computer keyboard map helpers."""

import pytest

from qwertykeys.keymap import (
    DEFAULT_KEY_MAP,
    is_modifier_key,
    key_map_for_layout,
    merge_key_maps,
    normalise_layout,
    parse_token,
)


def test_default_map_covers_two_octave_bands() -> None:
    tokens = set(DEFAULT_KEY_MAP.values())
    assert len(DEFAULT_KEY_MAP) == 22
    assert len(tokens) == 20
    assert {token[-1] for token in tokens} == {"l", "u"}
    assert sum(1 for token in tokens if token.endswith("l")) == 12


def test_every_default_token_parses() -> None:
    for token in DEFAULT_KEY_MAP.values():
        assert parse_token(token) is not None


@pytest.mark.parametrize(
    ("token", "expected"),
    [("Cl", ("C", "l")), ("C#u", ("C#", "u")), ("G#l", ("G#", "l"))],
)
def test_parse_token(token: str, expected: tuple) -> None:
    assert parse_token(token) == expected


@pytest.mark.parametrize("token", ["", "C", "Cx", "cl", "H#u", None, 42])
def test_parse_token_rejects_malformed(token) -> None:
    assert parse_token(token) is None


@pytest.mark.parametrize("locale", ["en", "en-US", "EN_gb", "fr", "", None])
def test_unknown_or_regional_layouts_fall_back_to_english(locale) -> None:
    assert normalise_layout(locale) == "en"
    assert key_map_for_layout(locale) == DEFAULT_KEY_MAP


def test_key_map_for_layout_returns_a_copy() -> None:
    key_map = key_map_for_layout("en")
    key_map[65] = "Dl"
    assert DEFAULT_KEY_MAP[65] == "Cl"


def test_merge_key_maps_returns_new_map() -> None:
    merged = merge_key_maps(DEFAULT_KEY_MAP, {65: "Dl", 81: "Bl"})
    assert merged[65] == "Dl"
    assert merged[81] == "Bl"
    assert merged[87] == "C#l"
    assert DEFAULT_KEY_MAP[65] == "Cl"
    assert 81 not in DEFAULT_KEY_MAP


@pytest.mark.parametrize(("code", "expected"), [(16, True), (17, True), (18, True), (91, True), (224, True), (65, False)])
def test_is_modifier_key(code: int, expected: bool) -> None:
    assert is_modifier_key(code) is expected
