"""Tests for the configuration manager."""

import yaml

from sieve_coref.utils.config import DEFAULT_CONFIG, ConfigManager


class TestConfigManager:
    """Tests for defaults, dotted access and YAML files."""

    def test_defaults(self):
        config = ConfigManager()

        assert config.get("coref.language") == "en"
        assert config.get("coref.sieves").split(",")[0] == "SpeakerMatch"
        assert config.get("coref.heuristic_filter.enabled") is False
        assert config.get("coref.missing", "fallback") == "fallback"

    def test_set_creates_nested_keys(self):
        config = ConfigManager()

        config.set("coref.sieve_options.NameMatch.max_sentence_distance", 2)

        assert config.get("coref.sieve_options.NameMatch.max_sentence_distance") == 2
        # defaults are copied, never shared
        assert "NameMatch" not in DEFAULT_CONFIG["coref"]["sieve_options"]

    def test_from_dict_deep_merges(self):
        config = ConfigManager.from_dict({"coref": {"heuristic_filter": {"enabled": True}}})

        assert config.get("coref.heuristic_filter.enabled") is True
        assert config.get("coref.heuristic_filter.max_mention_distance") == 50
        assert config.get("coref.language") == "en"

    def test_sieve_option_falls_back_to_global(self):
        config = ConfigManager.from_dict({"coref": {"sieve_options": {"pr-rf": {"merge_threshold": 0.5}}}})

        assert config.sieve_option("pr-rf", "merge_threshold") == 0.5
        assert config.sieve_option("pp-rf", "merge_threshold") == 0.3
        assert config.sieve_option("pr-rf", "mention_types") == "PRONOMINAL"
        assert config.sieve_option("PronounMatch", "skip_mention_type", "none") == "none"

    def test_sieve_names_accept_string_or_list(self):
        config = ConfigManager.from_dict({"coref": {"sieves": " MarkRole, ,ExactStringMatch "}})

        assert config.sieve_names() == ["MarkRole", "ExactStringMatch"]

        config.set("coref.sieves", ["PronounMatch", "pr-rf"])
        assert config.sieve_names() == ["PronounMatch", "pr-rf"]

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / "coref.yaml"
        path.write_text(yaml.dump({"coref": {"sieves": "ExactStringMatch", "postprocessing": True}}))

        config = ConfigManager(path)

        assert config.get("coref.sieves") == "ExactStringMatch"
        assert config.get("coref.postprocessing") is True
        assert config.get("coref.remove_singletons") is True

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(tmp_path / "absent.yaml")

        assert config.to_dict() == DEFAULT_CONFIG

    def test_invalid_yaml_keeps_defaults(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("coref: [unclosed\n")

        config = ConfigManager(path)

        assert config.get("coref.language") == "en"

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "saved.yaml"
        config = ConfigManager()
        config.set("coref.trace", True)

        config.save_config(path)
        reloaded = ConfigManager(path)

        assert reloaded.get("coref.trace") is True
        assert reloaded.to_dict() == config.to_dict()
