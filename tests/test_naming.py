"""Tests for the file naming scheme."""

import itertools

from southpark_dl.utils.formatting import compose_title, format_languages
from southpark_dl.utils.naming import build_filename, build_product_filename


def test_act_download_name():
    assert build_filename(2, 1, ["en"], "mp4", 3, None) == "S02E01A3EN.mp4"


def test_language_set_name():
    assert build_filename(2, 1, ["de", "en"], "mkv") == "S02E01DE+EN.mkv"


def test_empty_language_set_with_title():
    assert build_filename(2, 1, [], "mkv", None, "Title") == "S02E01 Title .mkv"


def test_single_language_string_is_one_element_set():
    assert build_filename(2, 1, "de", "aac", "1") == build_filename(
        2, 1, ["de"], "aac", "1"
    )


def test_no_languages_and_no_extension():
    assert build_filename(10, 12, None) == "S10E12"
    assert build_filename(10, 12, None, "mkv", "2") == "S10E12A2.mkv"


def test_languages_are_upper_cased_in_order():
    assert build_filename(1, 1, ["en", "de"], "mkv") == "S01E01EN+DE.mkv"


def test_non_numeric_act_ids_are_kept_verbatim():
    assert build_filename(5, 3, ["de"], "mp4", "intro") == "S05E03AintroDE.mp4"


def test_product_filename():
    name = build_product_filename(
        "South Park", 2, 1, ["de", "en"], "TitleDE (TitleEN)"
    )
    assert name == "South Park S02E01 TitleDE (TitleEN) DE+EN.mkv"


def test_distinct_inputs_never_collide():
    language_sets = [[], ["de"], ["en"], ["de", "en"], ["en", "de"]]
    acts = [None, "1", "2", "12"]
    titles = [None, "Title", "Other Title"]
    extensions = ["mp4", "mkv", "aac"]

    names = [
        build_filename(2, 1, languages, extension, act, title)
        for languages, act, title, extension in itertools.product(
            language_sets, acts, titles, extensions
        )
    ]
    assert len(names) == len(set(names))


def test_compose_title():
    assert compose_title(["Title1"]) == "Title1"
    assert compose_title(["Title1", "Title2", "Title3"]) == "Title1 (Title2) (Title3)"
    assert compose_title([]) == ""


def test_format_languages():
    assert format_languages(["de", "en"]) == "DE+EN"
