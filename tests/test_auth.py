from media_grabber.auth import has_cookies


NETSCAPE_COOKIES = """# Netscape HTTP Cookie File
# This is a generated file! Do not edit.

.youtube.com\tTRUE\t/\tTRUE\t1767225600\tPREF\tf6=40000000
"""


# Scenario 1: no cookie file at all
def test_has_cookies_missing_file(tmp_path):
    assert has_cookies(tmp_path / "cookies.txt") is False


# Scenario 2: a real exported cookie file
def test_has_cookies_with_real_cookie_line(tmp_path):
    cookie_file = tmp_path / "cookies.txt"
    cookie_file.write_text(NETSCAPE_COOKIES, encoding="utf-8")

    assert has_cookies(cookie_file) is True


def test_has_cookies_only_comments(tmp_path):
    """A file holding only '#' and '//' comments is not configured."""
    cookie_file = tmp_path / "cookies.txt"
    cookie_file.write_text("# Netscape HTTP Cookie File\n\n// paste your cookies below\n   # indented\n")

    assert has_cookies(cookie_file) is False


def test_has_cookies_placeholder_template(tmp_path):
    """The template shipped with example.com lines is ignored even with data lines."""
    cookie_file = tmp_path / "cookies.txt"
    cookie_file.write_text(".example.com\tTRUE\t/\tFALSE\t0\tSID\tvalue\n")

    assert has_cookies(cookie_file) is False


def test_has_cookies_blank_file(tmp_path):
    cookie_file = tmp_path / "cookies.txt"
    cookie_file.write_text("   \n\n\t\n")

    assert has_cookies(cookie_file) is False


def test_has_cookies_unreadable_content(tmp_path):
    """Content that is not valid UTF-8 is treated as no cookies, not as an error."""
    cookie_file = tmp_path / "cookies.txt"
    cookie_file.write_bytes(b"\xff\xfe\x00garbage")

    assert has_cookies(cookie_file) is False


def test_has_cookies_path_is_directory(tmp_path):
    assert has_cookies(tmp_path) is False


def test_has_cookies_is_recomputed_on_every_call(tmp_path):
    cookie_file = tmp_path / "cookies.txt"
    assert has_cookies(cookie_file) is False

    cookie_file.write_text(NETSCAPE_COOKIES)
    assert has_cookies(cookie_file) is True

    cookie_file.write_text("# emptied\n")
    assert has_cookies(cookie_file) is False
