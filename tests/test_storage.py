import pytest

from benchconductor.storage import parse_url


@pytest.mark.parametrize("scheme", ["gs", "gcs"])
def test_parse_url_splits_bucket_and_path(scheme):
    assert parse_url(f"{scheme}://results-bucket/runs/one") == ("results-bucket", "/runs/one")


def test_parse_url_without_path():
    assert parse_url("gs://results-bucket") == ("results-bucket", "")


def test_parse_url_unescapes_path():
    assert parse_url("gs://bucket/a%20b") == ("bucket", "/a b")


@pytest.mark.parametrize("url", ["s3://bucket/path", "https://example.com/x", "bucket/path"])
def test_parse_url_rejects_other_schemes(url):
    with pytest.raises(ValueError, match="invalid scheme"):
        parse_url(url)