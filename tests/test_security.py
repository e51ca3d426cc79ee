from splitter.core.security import hash_password, verify_password


def test_hash_roundtrip():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_long_passwords_are_not_truncated():
    base = "x" * 80
    assert not verify_password(base + "a", hash_password(base + "b"))


def test_malformed_hash_does_not_verify():
    assert not verify_password("anything", "not-a-bcrypt-hash")
