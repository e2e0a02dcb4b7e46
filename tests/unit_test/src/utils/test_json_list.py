import json
import tempfile
from pathlib import Path

import pytest

from src.utils.json_list import append_to_json_list, load_json_list


def test_load_nonexistent_file_returns_empty_list():
    with tempfile.NamedTemporaryFile(delete=True) as tmp:
        tmp_path = tmp.name
    assert load_json_list(tmp_path) == []


def test_append_and_load_skips_duplicates(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    append_to_json_list(feeds_file, "r/pics")
    append_to_json_list(feeds_file, "https://example.com/rss")
    append_to_json_list(feeds_file, "r/pics")
    assert load_json_list(feeds_file) == ["r/pics", "https://example.com/rss"]


def test_invalid_json_returns_empty_list(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    feeds_file.write_text("not valid json")
    assert load_json_list(feeds_file) == []


def test_file_contains_non_list_raises_error(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    feeds_file.write_text(json.dumps({"not": "a list"}))
    with pytest.raises(ValueError, match="does not contain a list"):
        load_json_list(Path(feeds_file))
