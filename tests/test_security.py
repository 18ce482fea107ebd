"""Password hashing, access tokens, pagination helpers and error codes."""
from sns.exceptions import ErrorCode, SnsApplicationException
from sns.pagination import Page, PageRequest
from sns.security import create_access_token, decode_username, hash_password, verify_password


def test_hash_and_verify_password():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_same_password_gets_different_salts():
    assert hash_password("s3cret") != hash_password("s3cret")


def test_verify_rejects_malformed_hash():
    assert not verify_password("s3cret", "plaintext")
    assert not verify_password("s3cret", "pbkdf2:sha256:abc$salt$digest")
    assert not verify_password("s3cret", "pbkdf2:sha256:1000$only-two-parts")


def test_token_round_trip():
    assert decode_username(create_access_token("alice")) == "alice"


def test_token_signed_with_other_key_is_rejected():
    token = create_access_token("alice", secret_key="another-signing-key-of-sufficient-length")
    assert decode_username(token) is None


def test_garbage_token_is_rejected():
    assert decode_username("not.a.token") is None


def test_page_request_offset():
    assert PageRequest(page=0, size=10).offset == 0
    assert PageRequest(page=3, size=10).offset == 30


def test_page_pages_and_map():
    page = Page(items=[1, 2], total=5, request=PageRequest(page=0, size=2))
    assert page.pages == 3
    doubled = page.map(lambda n: n * 2)
    assert doubled.items == [2, 4]
    assert doubled.total == 5
    assert Page.empty().pages == 0


def test_error_codes_carry_status():
    assert ErrorCode.USER_NOT_FOUND.status_code == 404
    assert ErrorCode.POST_NOT_FOUND.status_code == 404
    assert ErrorCode.INVALID_PERMISSION.status_code == 403
    assert ErrorCode.ALREADY_LIKED.status_code == 409


def test_exception_message():
    exc = SnsApplicationException(ErrorCode.POST_NOT_FOUND, "7 not found")
    assert str(exc) == "Post not found. 7 not found"
    assert exc.to_public_dict() == {"detail": "Post not found. 7 not found", "code": "POST_NOT_FOUND"}
    assert str(SnsApplicationException(ErrorCode.ALREADY_LIKED)) == "User already liked the post"
