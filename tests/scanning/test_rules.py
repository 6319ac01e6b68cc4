"""Unit tests for scanning/rules.py."""

from depmap.scanning.rules import ECMASCRIPT_RULES, ImportRuleKind, get_rules


class TestGetRules:
    def test_default_is_ecmascript(self):
        assert get_rules() is ECMASCRIPT_RULES

    def test_known_extension_case_insensitive(self):
        assert get_rules(".TSX") is ECMASCRIPT_RULES

    def test_unknown_extension_falls_back(self):
        assert get_rules(".coffee") is ECMASCRIPT_RULES


class TestRuleTable:
    def test_every_import_kind_has_a_rule(self):
        kinds = {rule.kind for rule in ECMASCRIPT_RULES.import_rules}
        assert kinds == set(ImportRuleKind)

    def test_side_effect_rule_does_not_match_default_import(self):
        [rule] = [r for r in ECMASCRIPT_RULES.import_rules if r.kind is ImportRuleKind.SIDE_EFFECT]
        assert rule.pattern.search("import a from './a'") is None
        assert rule.pattern.search("import './a'") is not None

    def test_word_boundary_on_import_keyword(self):
        [rule] = [r for r in ECMASCRIPT_RULES.import_rules if r.kind is ImportRuleKind.DYNAMIC]
        assert rule.pattern.search("reimport('./a')") is None
