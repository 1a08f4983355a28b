"""Tests for page name normalization and wiki URL helpers."""

import re

import pytest

from mcp_server_github_wiki.wiki.naming import (
    normalize_page_name,
    page_title_from_file,
    redact_token,
    wiki_clone_url,
    wiki_page_url,
)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Architettura del Sistema", "Architettura-del-Sistema.md"),
        ("API Documentation!!", "API-Documentation.md"),
        ("Home", "Home.md"),
        ("Home.md", "Home.md"),
        ("release_notes 2024", "release_notes-2024.md"),
        ("Tabs\tand\n\nnewlines", "Tabs-and-newlines.md"),
        ("multiple   spaces", "multiple-spaces.md"),
        ("Q&A: Getting Started?", "QA-Getting-Started.md"),
        ("Caffè è pronto", "Caff--pronto.md"),
        ("  padded title  ", "-padded-title-.md"),
        ("Notes!? ", "Notes-.md"),
        ("-Draft", "-Draft.md"),
    ],
)
def test_normalize_page_name(title, expected):
    assert normalize_page_name(title) == expected


@pytest.mark.parametrize("title", ["", "!!!", "?!", "€★☃"])
def test_titles_without_allowed_characters_normalize_to_extension(title):
    assert normalize_page_name(title) == ".md"


@pytest.mark.parametrize(
    "title, expected",
    [("   ", "-.md"), ("\t\n", "-.md"), (" ?! ", "--.md"), ("€ ★ ☃", "--.md")],
)
def test_whitespace_runs_survive_as_hyphens(title, expected):
    assert normalize_page_name(title) == expected


@pytest.mark.parametrize(
    "title",
    [
        "Architettura del Sistema",
        "API Documentation!!",
        "Home.md",
        "notes.md.md",
        "a - b",
        "snake_case",
        "",
        "Version 1.2.3",
        "-Draft",
        " x ",
    ],
)
def test_normalize_page_name_is_idempotent(title):
    once = normalize_page_name(title)
    assert normalize_page_name(once) == once


@pytest.mark.parametrize("title", ["Hello World", "x", "Über cool!", "a b"])
def test_normalized_names_only_use_allowed_characters(title):
    file_name = normalize_page_name(title)
    assert file_name.endswith(".md")
    assert re.fullmatch(r"[A-Za-z0-9_-]*", file_name[: -len(".md")])


def test_distinct_titles_can_share_a_file_name():
    assert normalize_page_name("FAQ!") == normalize_page_name("FAQ?")


def test_page_title_from_file():
    assert page_title_from_file("API-Documentation.md") == "API-Documentation"
    assert page_title_from_file("md.md") == "md"
    assert page_title_from_file("README") == "README"


def test_wiki_clone_url_embeds_token():
    assert (
        wiki_clone_url("octo-org", "handbook", "ghp_abc")
        == "https://ghp_abc@github.com/octo-org/handbook.wiki.git"
    )


def test_wiki_clone_url_custom_host():
    assert (
        wiki_clone_url("team", "docs", "tok", host="git.example.com")
        == "https://tok@git.example.com/team/docs.wiki.git"
    )


def test_wiki_page_url_strips_extension():
    assert (
        wiki_page_url("octo-org", "handbook", "Architettura-del-Sistema.md")
        == "https://github.com/octo-org/handbook/wiki/Architettura-del-Sistema"
    )


def test_redact_token():
    text = "fatal: could not read from https://ghp_secret@github.com/o/r.wiki.git"
    assert redact_token(text, "ghp_secret") == (
        "fatal: could not read from https://*****@github.com/o/r.wiki.git"
    )
    assert redact_token(text, "") == text


def test_redact_short_token_only_in_url_userinfo():
    text = "fatal: repository 'https://a@github.com/o/r.wiki.git/' not found"
    assert redact_token(text, "a") == (
        "fatal: repository 'https://*****@github.com/o/r.wiki.git/' not found"
    )
