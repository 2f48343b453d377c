import hashlib

from tracker.security import build_password_context


def test_hex_scheme_is_plain_sha256_digest():
    ctx = build_password_context("hex_sha256")
    assert ctx.hash("secret1") == hashlib.sha256(b"secret1").hexdigest()
    assert ctx.verify("secret1", hashlib.sha256(b"secret1").hexdigest())
    assert not ctx.verify("secret2", hashlib.sha256(b"secret1").hexdigest())


def test_pbkdf2_default_is_salted():
    ctx = build_password_context("pbkdf2_sha256")
    h1, h2 = ctx.hash("pw"), ctx.hash("pw")
    assert h1.startswith("$pbkdf2-sha256$")
    assert h1 != h2
    assert ctx.verify("pw", h1)


def test_pbkdf2_default_upgrades_legacy_digest():
    ctx = build_password_context("pbkdf2_sha256")
    legacy = hashlib.sha256(b"pw").hexdigest()
    valid, new_hash = ctx.verify_and_update("pw", legacy)
    assert valid
    assert new_hash.startswith("$pbkdf2-sha256$")


def test_hex_default_keeps_pbkdf2_hashes():
    salted = build_password_context("pbkdf2_sha256").hash("pw")
    valid, new_hash = build_password_context("hex_sha256").verify_and_update("pw", salted)
    assert valid
    assert new_hash is None
