"""Password Hashing — verifies bcrypt hashing and tolerant verification."""

from deck_api.core.passwords import burn_verification, hash_password, verify_password


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("gomu-gomu", rounds=4)
    second = hash_password("gomu-gomu", rounds=4)
    assert first != "gomu-gomu"
    assert first != second
    assert first.startswith("$2")


def test_verify_accepts_matching_password():
    hashed = hash_password("gomu-gomu", rounds=4)
    assert verify_password("gomu-gomu", hashed) is True


def test_verify_rejects_wrong_password():
    hashed = hash_password("gomu-gomu", rounds=4)
    assert verify_password("santoryu", hashed) is False


def test_verify_returns_false_on_malformed_hash():
    assert verify_password("gomu-gomu", "not-a-bcrypt-hash") is False


def test_burn_verification_returns_nothing():
    assert burn_verification("anything", rounds=4) is None
