"""Tests for the XML metadata databases."""

import pytest

from southpark_dl.exceptions import ConfigurationError, UnknownReferenceError
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.storage.player_database import PlayerDatabase
from tests.conftest import PLAYER_DB_PATH, TEST_PLAYER_URL, write_single_act_db


class TestEpisodeDatabase:
    def test_episode_ids(self, episode_db):
        assert episode_db.get_episode_ids(2, "de") == [1, 2]
        assert episode_db.get_episode_ids(2, "en") == [1, 2, 3]

    def test_acts(self, episode_db):
        assert episode_db.get_acts(2, 1, "de") == ["1", "2"]
        assert episode_db.get_acts(2, 2, "en") == ["1", "2", "3"]

    def test_language_codes_match_case_insensitively(self, episode_db):
        assert episode_db.get_acts(2, 1, "DE") == ["1", "2"]

    def test_url(self, episode_db):
        assert (
            episode_db.get_url(2, 1, "en", "2", "high")
            == "rtmpe://cdn.example.com/sp/s02e01/en/act2_high.mp4"
        )

    def test_audio_delay(self, episode_db):
        assert episode_db.get_act_audio_delay(2, 1, "en", "1") == 870
        assert episode_db.get_act_audio_delay(2, 1, "en", "2") == 0
        assert episode_db.get_act_audio_delay(2, 1, "de", "1") == 0

    def test_title(self, episode_db):
        assert episode_db.get_title(2, 2, "de") == "Zweite Folge"

    def test_checksum_absent(self, episode_db):
        assert episode_db.get_checksum(2, 1, "de", "1", "high") is None

    def test_checksum_present(self, tmp_path):
        db = EpisodeDatabase(write_single_act_db(tmp_path / "e.xml", "abc123"))
        assert db.get_checksum(2, 1, "de", "1", "high") == "abc123"

    @pytest.mark.parametrize(
        ("call", "kind"),
        [
            (lambda db: db.get_episode_ids(9, "de"), "season"),
            (lambda db: db.get_acts(2, 9, "de"), "episode"),
            (lambda db: db.get_acts(2, 1, "fr"), "language"),
            (lambda db: db.get_url(2, 1, "de", "7", "high"), "act"),
            (lambda db: db.get_url(2, 1, "de", "2", "low"), "resolution"),
            (lambda db: db.get_title(2, 3, "de"), "language"),
        ],
    )
    def test_unknown_references(self, episode_db, call, kind):
        with pytest.raises(UnknownReferenceError) as exc_info:
            call(episode_db)
        assert exc_info.value.kind == kind
        assert exc_info.value.source == str(episode_db.source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            EpisodeDatabase(tmp_path / "missing.xml")


class TestPlayerDatabase:
    def test_find_player(self):
        player = PlayerDatabase(PLAYER_DB_PATH).find_player(TEST_PLAYER_URL)
        assert player.url == TEST_PLAYER_URL
        assert player.size == "642539"
        assert player.hash.startswith("6a4d3b7c")

    def test_get_players(self):
        assert len(PlayerDatabase(PLAYER_DB_PATH).get_players()) == 2

    def test_unknown_player(self):
        with pytest.raises(UnknownReferenceError) as exc_info:
            PlayerDatabase(PLAYER_DB_PATH).find_player("http://unknown/player.swf")
        assert exc_info.value.value == "http://unknown/player.swf"
        assert "players.xml" in str(exc_info.value)
