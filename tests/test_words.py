"""Tests for the word bank."""
from __future__ import annotations

import json

import pytest
from shadow_signal.errors import DataIntegrityError
from shadow_signal.words import DEFAULT_WORD_BANK, load_word_bank, parse_word_bank


class TestDefaultBank:

    def test_has_several_domains(self):
        assert len(DEFAULT_WORD_BANK.domains) > 1
        assert not DEFAULT_WORD_BANK.is_empty()

    def test_every_word_has_similar_words(self):
        for domain in DEFAULT_WORD_BANK.domains:
            assert len(domain.words) >= 3
            for entry in domain.words:
                assert entry.similar
                assert entry.word not in entry.similar

    def test_unknown_domain(self):
        with pytest.raises(DataIntegrityError):
            DEFAULT_WORD_BANK.domain("Nope")


class TestLoadWordBank:

    def test_empty_path_gives_default(self):
        assert load_word_bank("") is DEFAULT_WORD_BANK

    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({
            "domains": [
                {"name": "Colors", "words": [
                    {"word": "Red", "similar": ["Crimson", "Scarlet"]},
                    {"word": "Blue", "similar": ["Navy"]},
                ]},
            ],
        }), encoding="utf-8")

        bank = load_word_bank(str(path))

        assert [d.name for d in bank.domains] == ["Colors"]
        assert bank.domain("Colors").words[0].similar == ("Crimson", "Scarlet")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataIntegrityError):
            load_word_bank(str(tmp_path / "absent.json"))

    def test_malformed_document(self):
        with pytest.raises(DataIntegrityError):
            parse_word_bank({"domains": [{"name": "X", "words": [{"similar": []}]}]})

    def test_empty_domains_make_empty_bank(self):
        assert parse_word_bank({"domains": [{"name": "X", "words": []}]}).is_empty()
