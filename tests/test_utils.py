import pytest

from dotp import utils
from dotp.exceptions import InvalidSecretEncoding, RandomSourceUnavailable


def test_decode_secret_rfc_key():
    assert utils.decode_secret("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ") == b"12345678901234567890"


def test_decode_secret_accepts_padding():
    assert utils.decode_secret("MZXW6===") == b"foo"


@pytest.mark.parametrize(
    "secret",
    [
        "gezdgnbvgy3tqojq",  # lowercase is not folded
        "GEZDGNBVGY3TQOJ1",  # 1 is outside the alphabet
        "MZXW6",  # padding missing
        "MZXW6=",  # padding short
        "GEZDGNBV GY3TQOJQ",
        "GEZDGNBVGY3TQOJé",
    ],
)
def test_decode_secret_rejects(secret):
    with pytest.raises(InvalidSecretEncoding):
        utils.decode_secret(secret)


def test_invalid_secret_is_value_error():
    with pytest.raises(ValueError):
        utils.decode_secret("!!!!!!!!")


def test_random_secret_decodes_to_ten_bytes():
    for _ in range(100):
        secret = utils.random_secret()
        assert len(secret) == 16
        assert len(utils.decode_secret(secret)) == 10


def test_random_secret_is_not_repeated():
    assert len({utils.random_secret() for _ in range(50)}) == 50


def test_random_secret_without_entropy(monkeypatch):
    def unavailable(n):
        raise OSError("no entropy")

    monkeypatch.setattr(utils, "token_bytes", unavailable)
    with pytest.raises(RandomSourceUnavailable):
        utils.random_secret()


def test_build_uri():
    uri = utils.build_uri("JBSWY3DPEHPK3PXP", "alice@example.com", "ACME Co")
    assert uri == "otpauth://totp/ACME%20Co:alice%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=ACME%20Co"


def test_build_uri_encodes_path_separators():
    uri = utils.build_uri("JBSWY3DPEHPK3PXP", "a/b:c", "x&y")
    assert uri == "otpauth://totp/x%26y:a%2Fb%3Ac?secret=JBSWY3DPEHPK3PXP&issuer=x%26y"


def test_build_uri_without_issuer():
    assert utils.build_uri("JBSWY3DPEHPK3PXP", "alice") == "otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP"


def test_build_uri_has_no_default_parameters():
    uri = utils.build_uri("JBSWY3DPEHPK3PXP", "alice", "demo-app")
    for param in ("digits=", "period=", "algorithm="):
        assert param not in uri


def test_strings_equal():
    assert utils.strings_equal("012345", "012345")
    assert not utils.strings_equal("12345", "012345")
    assert not utils.strings_equal("０１２３４５", "012345")
