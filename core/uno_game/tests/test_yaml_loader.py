from ..game_logic.yaml_loader import DEFAULT_RULES, YAMLLoader, load_game_rules


class TestRulesLoading:

    def test_bundled_rules(self):
        rules = load_game_rules()
        assert rules["dealing"]["hand_size"] == 7
        assert rules["players"] == {"min": 2, "max": 4}
        assert rules["room_code"]["length"] == 6
        assert rules["draw_penalties"] == {"+2": 2, "+4": 4}

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("players:\n  max: 6\n")
        rules = load_game_rules(str(path))
        assert rules["players"] == {"min": 2, "max": 6}
        assert rules["dealing"] == DEFAULT_RULES["dealing"]

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_game_rules(str(tmp_path / "absent.yaml")) == DEFAULT_RULES

    def test_broken_yaml_is_logged_and_ignored(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("players: [unclosed\n")
        assert YAMLLoader(str(tmp_path)).load_single_rule("broken.yaml") == {}
