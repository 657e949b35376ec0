import pytest

from taskboard.security import PasswordHasher


def test_hash_is_not_the_plaintext_and_verifies(hasher):
    digest = hasher.hash("secret")

    assert digest != "secret"
    assert hasher.verify("secret", digest)


def test_wrong_password_does_not_verify(hasher):
    assert not hasher.verify("wrong", hasher.hash("secret"))


def test_each_hash_gets_its_own_salt(hasher):
    first, second = hasher.hash("secret"), hasher.hash("secret")

    assert first != second
    assert hasher.verify("secret", first)
    assert hasher.verify("secret", second)


def test_cost_factor_is_part_of_the_digest():
    digest = PasswordHasher(rounds=5).hash("secret")
    assert digest.startswith("$2b$05$")


@pytest.mark.parametrize("digest", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_malformed_digest_is_a_mismatch(hasher, digest):
    assert hasher.verify("secret", digest) is False


def test_empty_password_is_never_hashed(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_empty_password_does_not_verify(hasher):
    assert hasher.verify("", hasher.hash("secret")) is False


def test_long_passwords_verify(hasher):
    password = "p" * 100
    assert hasher.verify(password, hasher.hash(password))


def test_dummy_digest_is_cached_and_never_matches_user_input(hasher):
    digest = hasher.dummy_digest()

    assert digest is hasher.dummy_digest()
    assert digest.startswith("$2b$04$")
    assert not hasher.verify("secret", digest)
