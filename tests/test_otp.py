"""
Unit Tests for OTP Generation, Storage and Verification
=======================================================
"""

import pytest
from datetime import timedelta

from prescripto_core.config import OTPSettings
from prescripto_core.otp import (
    InMemoryOTPStore,
    OTPGenerator,
    OTPVerifier,
    ValidationError,
    VerifyReason,
    generate_code,
)


class TestGenerateCode:
    """Tests for the raw code generator."""

    @pytest.mark.parametrize("digits", [4, 6, 8])
    def test_length_and_digits(self, digits):
        """Should always return exactly ``digits`` numeric characters."""
        for _ in range(200):
            code = generate_code(digits)
            assert len(code) == digits
            assert code.isdigit()

    def test_range_lower_bound(self, monkeypatch):
        """Smallest draw should still be full length."""
        import prescripto_core.otp.generator as gen

        monkeypatch.setattr(gen.secrets, "randbelow", lambda n: 0)

        assert generate_code(6) == "100000"

    def test_range_upper_bound(self, monkeypatch):
        """Largest draw should be all nines."""
        import prescripto_core.otp.generator as gen

        monkeypatch.setattr(gen.secrets, "randbelow", lambda n: n - 1)

        assert generate_code(6) == "999999"

    def test_rejects_zero_digits(self):
        with pytest.raises(ValidationError):
            generate_code(0)


class TestOTPGenerator:
    """Tests for OTPGenerator backed by a store."""

    def test_generate_stores_entry(self, generator, store, clock):
        """Should store the code with creation and expiry timestamps."""
        code = generator.generate("a@b.com", digits=6, expiry_minutes=5)

        entry = store.get("a@b.com")
        assert entry.code == code
        assert entry.created_at == clock.now
        assert entry.expires_at == clock.now + timedelta(minutes=5)

    def test_defaults_from_settings(self, store, clock):
        """Should use configured digits and expiry when not overridden."""
        generator = OTPGenerator(store, OTPSettings(digits=8, expiry_minutes=3), clock=clock)

        code = generator.generate("+34600111222")

        assert len(code) == 8
        assert store.get("+34600111222").expires_at == clock.now + timedelta(minutes=3)

    def test_regenerate_overwrites(self, generator, store):
        """A second request should replace the first entry."""
        generator.generate("a@b.com")
        second = generator.generate("a@b.com")

        assert len(store) == 1
        assert store.get("a@b.com").code == second

    def test_requires_identifier(self, generator):
        with pytest.raises(ValidationError):
            generator.generate("")

    def test_rejects_negative_expiry(self, generator):
        with pytest.raises(ValidationError):
            generator.generate("a@b.com", expiry_minutes=-1)

    def test_get_info_hides_code(self, generator, clock):
        """Should expose timestamps and expiry state only."""
        generator.generate("a@b.com", expiry_minutes=5)

        info = generator.get_info("a@b.com")
        assert info.is_expired is False
        assert not hasattr(info, "code")

        clock.advance(minutes=5)
        assert generator.get_info("a@b.com").is_expired is True

    def test_get_info_missing(self, generator):
        assert generator.get_info("nobody@b.com") is None

    def test_create_entry_returns_stored_entry(self, generator, store, clock):
        """The returned entry should be the one written to the store."""
        entry = generator.create_entry(" a@b.com ", expiry_minutes=5)

        assert entry.identifier == "a@b.com"
        assert entry.created_at == clock.now
        assert store.get("a@b.com") == entry


class TestInMemoryOTPStore:

    def test_put_get_delete(self):
        store = InMemoryOTPStore()
        gen = OTPGenerator(store)
        gen.generate("x@y.com")

        assert "x@y.com" in store
        store.delete("x@y.com")
        assert store.get("x@y.com") is None

    def test_delete_missing_is_noop(self):
        store = InMemoryOTPStore()
        store.delete("missing")
        assert len(store) == 0


class TestOTPVerifier:
    """Tests for verification state transitions."""

    def test_round_trip_single_use(self, generator, verifier):
        """Should verify once, then fail with the same code."""
        code = generator.generate("a@b.com", digits=6, expiry_minutes=5)

        first = verifier.verify("a@b.com", code)
        second = verifier.verify("a@b.com", code)

        assert first.success is True
        assert first.reason == VerifyReason.VERIFIED
        assert second.success is False
        assert second.reason == VerifyReason.NOT_FOUND

    def test_only_latest_code_verifies(self, generator, verifier):
        """After re-issuance the earlier code should be rejected."""
        first = generator.generate("a@b.com")
        second = generator.generate("a@b.com")
        if first == second:
            pytest.skip("identical codes drawn")

        assert verifier.verify("a@b.com", first).success is False
        assert verifier.verify("a@b.com", second).success is True

    def test_no_entry(self, verifier, store):
        result = verifier.verify("ghost@b.com", "123456")

        assert result.success is False
        assert result.reason == VerifyReason.NOT_FOUND
        assert len(store) == 0

    def test_expired_is_deleted(self, generator, verifier, store, clock):
        """Expired code should fail with an expiry message and be removed."""
        code = generator.generate("a@b.com", expiry_minutes=5)
        clock.advance(minutes=5, seconds=1)

        result = verifier.verify("a@b.com", code)

        assert result.success is False
        assert result.reason == VerifyReason.EXPIRED
        assert "expired" in result.message.lower()
        assert store.get("a@b.com") is None

        again = verifier.verify("a@b.com", code)
        assert again.reason == VerifyReason.NOT_FOUND

    def test_zero_expiry_is_immediately_expired(self, generator, verifier):
        code = generator.generate("a@b.com", expiry_minutes=0)

        result = verifier.verify("a@b.com", code)

        assert result.reason == VerifyReason.EXPIRED

    def test_expiry_boundary(self, generator, verifier, clock):
        """A code checked exactly at ``expires_at`` is expired."""
        code = generator.generate("a@b.com", expiry_minutes=5)
        clock.advance(minutes=5)

        assert verifier.verify("a@b.com", code).reason == VerifyReason.EXPIRED

    def test_mismatch_keeps_entry(self, generator, verifier, store, monkeypatch):
        """A wrong code should fail and leave the entry retryable."""
        import prescripto_core.otp.generator as gen

        monkeypatch.setattr(gen.secrets, "randbelow", lambda n: 42981)
        code = generator.generate("a@b.com")
        assert code == "142981"

        wrong = verifier.verify("a@b.com", "000000")
        assert wrong.success is False
        assert wrong.reason == VerifyReason.MISMATCH
        assert store.get("a@b.com") is not None

        assert verifier.verify("a@b.com", code).success is True

    def test_code_is_stripped(self, generator, verifier):
        code = generator.generate("a@b.com")

        assert verifier.verify("a@b.com", f" {code} ").success is True

    def test_identifier_is_stripped(self, generator, verifier):
        """Padding around the identifier should reach the same entry."""
        code = generator.generate(" a@b.com ")

        assert verifier.verify(" a@b.com\n", code).success is True

    @pytest.mark.parametrize("identifier,code", [("", "123456"), ("  ", "123456"), ("a@b.com", ""), (None, "1")])
    def test_requires_identifier_and_code(self, verifier, identifier, code):
        with pytest.raises(ValidationError):
            verifier.verify(identifier, code)
