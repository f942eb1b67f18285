"""Tests for the deck check job."""

import json
import sys
from pathlib import Path

import pytest

from icebreaker.jobs.check_deck import check_deck_file, format_status, main
from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.format_result import DeckClassification, DeckStatus, FormatResult


@pytest.fixture
def deck_file(tmp_path: Path) -> Path:
    path = tmp_path / "deck.json"
    path.write_text(
        json.dumps({"name": "Enigma Wall", "identity": "20055", "cards": {"20065": 3}}),
        encoding="utf-8",
    )
    return path


class TestFormatStatus:
    def test_renders_each_format(self) -> None:
        status = DeckStatus(
            {
                "valid": FormatResult(legal=True),
                "mwl": FormatResult(
                    legal=False,
                    reason=(
                        "Contains a banned card: e.g. Sifr\n"
                        "Contains more than one restricted card"
                    ),
                ),
                "rotation": FormatResult(legal=True),
            }
        )
        assert format_status(status).splitlines() == [
            "valid: legal",
            "mwl: NOT LEGAL",
            "    Contains a banned card: e.g. Sifr",
            "    Contains more than one restricted card",
            "rotation: legal",
            "Overall: casual",
        ]


class TestCheckDeckFile:
    def test_evaluates_deck(self, deck_file: Path, card_data_dir: Path) -> None:
        status = check_deck_file(deck_file, card_data_dir)
        assert not status["valid"].legal
        assert "Deck is below the identity's minimum size" in status["valid"].reason
        assert status["mwl"].legal
        assert status.classification == DeckClassification.INVALID

    def test_trusts_fresh_cached_status(self, tmp_path: Path, card_data_dir: Path) -> None:
        cached = {
            "valid": {"legal": True},
            "mwl": {"legal": True},
            "rotation": {"legal": True},
        }
        path = tmp_path / "cached.json"
        path.write_text(
            json.dumps(
                {"identity": "20055", "cards": {"20065": 3}, "date": "2018-12-01", "status": cached}
            ),
            encoding="utf-8",
        )
        assert check_deck_file(path, card_data_dir).classification == DeckClassification.LEGAL

    def test_unreadable_cached_status_is_recomputed(
        self, tmp_path: Path, card_data_dir: Path
    ) -> None:
        path = tmp_path / "old_save.json"
        path.write_text(
            json.dumps(
                {
                    "identity": "20055",
                    "cards": {"20065": 3},
                    "date": "2018-12-01",
                    "status": {"valid": {"legal": False}},
                }
            ),
            encoding="utf-8",
        )
        status = check_deck_file(path, card_data_dir)
        assert "Deck is below the identity's minimum size" in status["valid"].reason

    def test_missing_deck_file(self, tmp_path: Path, card_data_dir: Path) -> None:
        with pytest.raises(KnownError) as exc_info:
            check_deck_file(tmp_path / "nowhere.json", card_data_dir)
        assert exc_info.value.kind == FailureKind.NOT_FOUND
        assert "nowhere.json" in exc_info.value.message

    def test_malformed_deck_file(self, tmp_path: Path, card_data_dir: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"identity": ', encoding="utf-8")
        with pytest.raises(KnownError) as exc_info:
            check_deck_file(path, card_data_dir)
        assert exc_info.value.kind == FailureKind.INVALID_INPUT


class TestMain:
    def test_prints_status(
        self,
        deck_file: Path,
        card_data_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            sys, "argv", ["icebreaker-check", str(deck_file), "--data-dir", str(card_data_dir)]
        )
        main()
        out = capsys.readouterr().out
        assert "valid: NOT LEGAL" in out
        assert out.rstrip().endswith("Overall: invalid")

    def test_known_error_exits(
        self,
        tmp_path: Path,
        card_data_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"identity": "00000"}), encoding="utf-8")
        monkeypatch.setattr(
            sys, "argv", ["icebreaker-check", str(path), "--data-dir", str(card_data_dir)]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1

    def test_missing_deck_file_exits(
        self,
        tmp_path: Path,
        card_data_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        missing = tmp_path / "nowhere.json"
        monkeypatch.setattr(
            sys, "argv", ["icebreaker-check", str(missing), "--data-dir", str(card_data_dir)]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Deck file not found" in caplog.text

    def test_missing_card_data_exits(
        self,
        tmp_path: Path,
        deck_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        empty = tmp_path / "no_data"
        empty.mkdir()
        monkeypatch.setattr(
            sys, "argv", ["icebreaker-check", str(deck_file), "--data-dir", str(empty)]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Card data not found" in caplog.text
