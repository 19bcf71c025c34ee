"""
Tests for random slug generation and input validators.
"""
import pytest

from slug_shortener.exceptions import InvalidSlugError, InvalidUrlError
from slug_shortener.services.slug_generator import URL_SAFE_ALPHABET, generate_slug
from slug_shortener.utils.validators import validate_slug, validate_url


class TestGenerateSlug:

    def test_default_length(self):
        assert len(generate_slug()) == 5

    def test_uses_alphabet(self):
        for _ in range(200):
            assert set(generate_slug()) <= set(URL_SAFE_ALPHABET)

    def test_generated_slugs_pass_validation(self):
        """Generated slugs must be acceptable as user slugs too"""
        for _ in range(50):
            slug = generate_slug()
            assert validate_slug(slug) == slug

    def test_custom_length_and_alphabet(self):
        slug = generate_slug(length=8, alphabet="ab")
        assert len(slug) == 8
        assert set(slug) <= {"a", "b"}

    def test_slugs_vary(self):
        assert len({generate_slug() for _ in range(100)}) > 90

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            generate_slug(length=length)

    def test_rejects_empty_alphabet(self):
        with pytest.raises(ValueError):
            generate_slug(alphabet="")


class TestValidators:

    def test_slug_trimmed(self):
        assert validate_slug("  hello ") == "hello"

    def test_slug_custom_bounds(self):
        assert validate_slug("abc", min_length=3, max_length=3) == "abc"
        with pytest.raises(InvalidSlugError):
            validate_slug("abcd", min_length=3, max_length=3)

    def test_slug_message_names_bounds(self):
        with pytest.raises(InvalidSlugError) as exc_info:
            validate_slug("x")
        assert "5-20" in exc_info.value.message

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://localhost:8000/path?q=1",
        "ftp://files.example.org/pub",
        "http://127.0.0.1",
    ])
    def test_valid_urls_returned_unchanged(self, url):
        assert validate_url(url) == url

    def test_bare_domain_gets_scheme(self):
        assert validate_url("example.com/page") == "http://example.com/page"

    def test_bare_word_rejected(self):
        with pytest.raises(InvalidUrlError):
            validate_url("localhostish")

    def test_no_normalization(self):
        with pytest.raises(InvalidUrlError):
            validate_url("example.com", add_default_scheme=False)

    def test_unsupported_scheme(self):
        with pytest.raises(InvalidUrlError):
            validate_url("file:///etc/passwd")
