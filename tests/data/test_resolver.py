import pytest

from chart_mcp.core.errors import ValidationError
from chart_mcp.data.resolver import parse_data_uri, resolve_data_path


def test_resolves_bare_filename_inside_root(upload_dir):
    assert resolve_data_path("sales.csv", upload_dir) == (upload_dir / "sales.csv").resolve()


def test_resolves_data_uri(upload_dir):
    assert resolve_data_path("data://sales%20q1.csv", upload_dir) == (upload_dir / "sales q1.csv").resolve()


@pytest.mark.parametrize(
    "identifier",
    ["", "../secrets.csv", "data://../etc/passwd", "data://..", "sub/file.csv", "sub\\file.csv", "data://%2E%2E%2Fx.csv"],
)
def test_rejects_unsafe_identifiers(identifier, upload_dir):
    with pytest.raises(ValidationError):
        resolve_data_path(identifier, upload_dir)


def test_rejects_other_schemes(upload_dir):
    with pytest.raises(ValidationError, match="protocol"):
        resolve_data_path("file://sales.csv", upload_dir)


def test_parse_data_uri_requires_scheme():
    assert parse_data_uri("data://report.json") == "report.json"
    with pytest.raises(ValidationError, match="must start with 'data://'"):
        parse_data_uri("report.json")
