from bitbinder.utils import password_crypto as pc


def test_hash_and_verify_password():
    encoded = pc.hash_password("hunter22")
    assert encoded.startswith("pbkdf2$sha256$100000$")
    assert pc.verify_password("hunter22", encoded)
    assert not pc.verify_password("hunter23", encoded)


def test_hash_uses_fresh_salt():
    assert pc.hash_password("same") != pc.hash_password("same")


def test_verify_password_rejects_malformed():
    assert not pc.verify_password("x", "")
    assert not pc.verify_password("x", "not-a-hash")
    assert not pc.verify_password("x", "md5$sha256$1$AA==$AA==")
    assert not pc.verify_password("x", "pbkdf2$sha256$abc$AA==$AA==")


def test_token_roundtrip_and_secret_hash():
    tid, secret, full = pc.generate_token()
    assert full.startswith("bb_sess_")
    parsed = pc.parse_token(full)
    assert parsed.token_id == tid and parsed.secret == secret
    hashed = pc.hash_secret(secret)
    assert pc.verify_secret(secret, hashed)
    assert not pc.verify_secret("wrong", hashed)
    assert not pc.verify_secret(secret, "garbage")


def test_parse_token_invalid():
    assert pc.parse_token("") is None
    assert pc.parse_token("hs_pat_abc_def") is None
    assert pc.parse_token("bb_sess_noseparator") is None
    assert pc.parse_token("bb_sess__secret") is None
