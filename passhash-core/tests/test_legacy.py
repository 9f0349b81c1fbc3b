"""
Unit Tests for the legacy stretched hash
========================================
"""

import hashlib

import pytest


def _fixed_source(n):
    return bytes(range(n))


def _engine(**changes):
    from passhash_core.config import HashConfig
    from passhash_core.password.legacy import LegacyHashEngine

    return LegacyHashEngine(HashConfig().with_bounds(**changes), random_source=_fixed_source)


class TestGenerateSettings:
    """Tests for settings generation."""

    def test_settings_layout(self):
        from passhash_core.encoding import encode64

        settings = _engine().generate_settings(7)

        assert len(settings) == 12
        assert settings.startswith("$S$5")
        assert settings[4:] == encode64(_fixed_source(6), 6)

    def test_cost_clamped_to_max(self):
        from passhash_core.password.legacy import parse_count_log2

        settings = _engine().generate_settings(50)

        assert len(settings) == 12
        assert settings.startswith("$S$")
        assert parse_count_log2(settings) == 30

    def test_cost_clamped_to_min(self):
        from passhash_core.password.legacy import parse_count_log2

        assert parse_count_log2(_engine().generate_settings(1)) == 7

    def test_fresh_salt_per_call(self):
        from passhash_core.password.legacy import LegacyHashEngine

        engine = LegacyHashEngine()

        assert engine.generate_settings(7) != engine.generate_settings(7)


class TestCrypt:
    """Tests for the stretching algorithm."""

    def test_matches_reference_stretching(self):
        from passhash_core.encoding import encode64

        engine = _engine()
        settings = engine.generate_settings(7)
        salt = settings[4:12].encode()

        digest = hashlib.sha512(salt + b"secret").digest()
        for _ in range(2 ** 7):
            digest = hashlib.sha512(digest + b"secret").digest()
        expected = (settings + encode64(digest, 64))[:55]

        assert engine.crypt("sha512", "secret", settings) == expected

    def test_deterministic_for_fixed_settings(self):
        engine = _engine()
        settings = engine.generate_settings(7)

        assert engine.crypt("sha512", "pw", settings) == engine.crypt("sha512", "pw", settings)

    def test_full_hash_accepted_as_settings(self):
        engine = _engine()
        stored = engine.crypt("sha512", "pw", engine.generate_settings(7))

        assert engine.crypt("sha512", "pw", stored) == stored

    def test_sha512_hash_truncated_to_55(self):
        engine = _engine()

        assert len(engine.crypt("sha512", "pw", engine.generate_settings(7))) == 55

    def test_md5_hash_length(self):
        engine = _engine()
        settings = "$P$" + engine.generate_settings(7)[3:]

        assert len(engine.crypt("md5", "pw", settings)) == 34

    def test_phpass_portable_hash(self):
        from passhash_core.password.legacy import LegacyHashEngine

        engine = LegacyHashEngine()
        stored = "$P$9IQRaTwmfeRo7ud9Fh4E2PdI0S3r.L0"

        assert engine.crypt("md5", "test12345", stored) == stored
        assert engine.check_password("test12345", stored) is True
        assert engine.check_password("test12346", stored) is False

    def test_malformed_settings(self):
        from passhash_core.exceptions import MalformedSettings

        engine = _engine()
        with pytest.raises(MalformedSettings):
            engine.crypt("sha512", "pw", "S$5abcdefgh")
        with pytest.raises(MalformedSettings):
            engine.crypt("sha512", "pw", "$SS5abcdefgh")
        with pytest.raises(MalformedSettings):
            engine.crypt("sha512", "pw", "")

    def test_cost_out_of_range(self):
        from passhash_core.exceptions import CostOutOfRange

        engine = _engine()
        # '4' is index 6, below the minimum of 7
        with pytest.raises(CostOutOfRange) as exc_info:
            engine.crypt("sha512", "pw", "$S$4abcdefgh")
        assert exc_info.value.cost == 6
        # '$' is not in the alphabet at all
        with pytest.raises(CostOutOfRange):
            engine.crypt("sha512", "pw", "$S$$abcdefgh")

    def test_salt_too_short(self):
        from passhash_core.exceptions import SaltTooShort

        with pytest.raises(SaltTooShort):
            _engine().crypt("sha512", "pw", "$S$5abc")

    def test_password_too_long(self):
        from passhash_core.exceptions import PasswordTooLong

        engine = _engine()
        settings = engine.generate_settings(7)

        engine.crypt("sha512", "a" * 512, settings)
        with pytest.raises(PasswordTooLong):
            engine.crypt("sha512", "a" * 513, settings)

    def test_password_limit_counts_bytes(self):
        from passhash_core.exceptions import PasswordTooLong

        engine = _engine()
        settings = engine.generate_settings(7)

        # 3 UTF-8 bytes per character
        engine.crypt("sha512", "密" * 170, settings)
        with pytest.raises(PasswordTooLong):
            engine.crypt("sha512", "密" * 200, settings)

    def test_unknown_digest_rejected_by_hashlib(self):
        engine = _engine()

        with pytest.raises(ValueError):
            engine.crypt("not-a-digest", "pw", engine.generate_settings(7))


class TestLegacyPasswords:
    """Tests for legacy hash generation, checking, and rehash status."""

    def test_round_trip(self):
        engine = _engine()
        stored = engine.hash_password("correct horse", 7)

        assert stored.startswith("$S$")
        assert engine.check_password("correct horse", stored) is True
        assert engine.check_password("wrong horse", stored) is False

    def test_default_cost_used(self):
        from passhash_core.password.legacy import parse_count_log2

        engine = _engine(legacy_default_cost=8)

        assert parse_count_log2(engine.hash_password("pw")) == 8

    def test_check_rejects_non_legacy(self):
        from passhash_core.exceptions import UnsupportedFormat

        with pytest.raises(UnsupportedFormat):
            _engine().check_password("pw", "$2y$10$abc")

    def test_needs_new_hash(self):
        engine = _engine(legacy_default_cost=7)
        stored = engine.hash_password("pw")

        assert engine.needs_new_hash(stored) is False
        assert engine.needs_new_hash(stored[:-1]) is True
        assert engine.needs_new_hash(engine.hash_password("pw", 8)) is True
        assert engine.needs_new_hash("$P$9IQRaTwmfeRo7ud9Fh4E2PdI0S3r.L0") is True
        assert engine.needs_new_hash("5f4dcc3b5aa765d61d8327deb882cf99") is True
