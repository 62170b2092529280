import pytest

from leaktrack.config import ConfigurationError
from leaktrack.config.runtime_helpers import DotenvLoader


def test_missing_file_yields_nothing(tmp_path):
    assert DotenvLoader.load_from_file(tmp_path / "absent.env") == {}


def test_parses_quotes_comments_and_export(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# comment\n"
        "\n"
        "LEAKTRACK_A='quoted'\n"
        'export LEAKTRACK_B="double"\n'
        "not a pair\n"
        "=novalue\n"
        "OTHER=1\n"
    )

    assert DotenvLoader.load_from_file(path) == {"LEAKTRACK_A": "quoted", "LEAKTRACK_B": "double", "OTHER": "1"}
    assert DotenvLoader.load_from_file(path, prefix="LEAKTRACK_") == {"LEAKTRACK_A": "quoted", "LEAKTRACK_B": "double"}


def test_unreadable_file_raises(tmp_path):
    directory = tmp_path / "dir.env"
    directory.mkdir()

    with pytest.raises(ConfigurationError, match="Failed to load dotenv defaults"):
        DotenvLoader.load_from_file(directory)
