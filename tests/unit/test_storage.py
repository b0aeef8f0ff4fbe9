from mrologix.storage import file_url


def test_file_url_defaults_to_bucket(monkeypatch):
    monkeypatch.delenv("MROLOGIX_FILE_BASE_URL", raising=False)
    monkeypatch.delenv("MROLOGIX_S3_BUCKET", raising=False)
    assert file_url("docs/a b.pdf") == "https://mro-logix-amazons3-bucket.s3.amazonaws.com/docs/a%20b.pdf"


def test_file_url_bucket_override(monkeypatch):
    monkeypatch.delenv("MROLOGIX_FILE_BASE_URL", raising=False)
    monkeypatch.setenv("MROLOGIX_S3_BUCKET", "other-bucket")
    assert file_url("/x.png") == "https://other-bucket.s3.amazonaws.com/x.png"


def test_file_url_base_url(monkeypatch):
    monkeypatch.setenv("MROLOGIX_FILE_BASE_URL", "http://localhost:9000/files/")
    assert file_url("x.png") == "http://localhost:9000/files/x.png"
