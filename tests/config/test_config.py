"""Configuration loading tests."""

import pytest

from quill.config import QuillConfig, find_config, load_config
from quill.errors import ConfigError


class TestFindConfig:
    """The nearest .quillrc file wins, searching upward."""

    def test_found_in_parent(self, tmp_path):
        (tmp_path / ".quillrc.yml").write_text("target: text\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(str(nested)) == str(tmp_path / ".quillrc.yml")

    def test_nearest_wins(self, tmp_path):
        (tmp_path / ".quillrc.yml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        (nested / ".quillrc.json").write_text("{}")
        assert find_config(str(nested)) == str(nested / ".quillrc.json")


class TestLoadConfig:
    """YAML and JSON files map onto QuillConfig; bad values are rejected."""

    def test_yaml(self, tmp_path):
        path = tmp_path / ".quillrc.yml"
        path.write_text("target: llvm\nquote: \"'\"\noutput: out.ll\nlog_level: INFO\n")
        config = load_config(str(path))
        assert config == QuillConfig(target="llvm", quote="'", output="out.ll", log_level="info")

    def test_json(self, tmp_path):
        path = tmp_path / ".quillrc.json"
        path.write_text('{"quote": "\'"}')
        assert load_config(str(path)).quote == "'"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / ".quillrc.yml"
        path.write_text("")
        assert load_config(str(path)) == QuillConfig()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / ".quillrc.yml"
        path.write_text("colour: blue\n")
        assert load_config(str(path)) == QuillConfig()

    def test_search_from_start_dir(self, tmp_path):
        (tmp_path / ".quillrc.yaml").write_text("target: llvm\n")
        assert load_config(start_dir=str(tmp_path)).target == "llvm"

    @pytest.mark.parametrize("body", [
        "target: wasm\n",
        "quote: '`'\n",
        "log_level: loud\n",
        "- just\n- a list\n",
        "target: [unclosed\n",
    ])
    def test_invalid(self, tmp_path, body):
        path = tmp_path / ".quillrc.yml"
        path.write_text(body)
        with pytest.raises(ConfigError):
            load_config(str(path))
