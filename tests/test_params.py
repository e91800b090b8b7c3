"""Tests for the s= e= l= command-line parameters."""

import pytest

from southpark_dl.cli.params import parse_episode_params
from southpark_dl.exceptions import ConfigurationError


def test_full_selection():
    selection = parse_episode_params(["s=2", "e=1", "l=de+en"])
    assert selection.season == 2
    assert selection.episode == 1
    assert selection.languages == ["de", "en"]


def test_episode_is_optional():
    selection = parse_episode_params(["l=de", "s=12"])
    assert selection.episode == 0


def test_episode_zero_means_whole_season():
    assert parse_episode_params(["s=2", "e=0", "l=de"]).episode == 0


def test_keys_are_case_insensitive():
    selection = parse_episode_params(["S=3", "E=4", "L=en"])
    assert (selection.season, selection.episode, selection.languages) == (3, 4, ["en"])


@pytest.mark.parametrize(
    "params",
    [
        ["s=2"],  # no language
        ["e=1", "l=de"],  # no season
        ["s=0", "l=de"],
        ["s=two", "l=de"],
        ["s=2", "e=-1", "l=de"],
        ["s=2", "e=x", "l=de"],
        ["s=2", "l=de", "x=1"],
        ["s=2", "l=de", "verbose"],
        ["s=2=3", "l=de"],
        ["s=2", "l="],
    ],
)
def test_invalid_parameters(params):
    with pytest.raises(ConfigurationError):
        parse_episode_params(params)

