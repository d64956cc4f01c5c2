"""Tests for duplicate detection and media-query grouping."""

from css2scss.dedup import (
    declaration_hash,
    detect_and_merge_duplicates,
    group_by_media_query,
)
from css2scss.events import DuplicatesMerged, EventBus, EventRecorder
from css2scss.model.rule import BEMInfo, Declaration, ParsedRule, RuleKind


def _rule(selector, *decls, media=None, important=()):
    return ParsedRule(
        selector=selector,
        declarations=[Declaration(p, v, important=p in important) for p, v in decls],
        media_query=media,
    )


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


class TestDeclarationHash:
    def test_order_independent(self):
        a = [Declaration("color", "red"), Declaration("margin", "0")]
        b = [Declaration("margin", "0"), Declaration("color", "red")]
        assert declaration_hash(a) == declaration_hash(b)

    def test_important_changes_hash(self):
        a = [Declaration("color", "red")]
        b = [Declaration("color", "red", important=True)]
        assert declaration_hash(a) != declaration_hash(b)

    def test_comments_ignored(self):
        a = [Declaration("color", "red")]
        b = [Declaration.comment("note"), Declaration("color", "red")]
        assert declaration_hash(a) == declaration_hash(b)


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------

BUTTON = (("padding", "10px 20px"), ("border", "none"), ("cursor", "pointer"))


class TestMerge:
    def test_identical_rules_merged(self):
        rules = [_rule(".btn", *BUTTON), _rule(".button", *BUTTON), _rule(".action", *BUTTON)]
        merged = detect_and_merge_duplicates(rules)
        assert len(merged) == 1
        assert merged[0].selector == ".btn, .button, .action"
        assert [d.signature for d in merged[0].declarations] == [
            d.signature for d in rules[0].declarations
        ]

    def test_declaration_order_irrelevant(self):
        rules = [
            _rule(".a", ("color", "red"), ("margin", "0")),
            _rule(".b", ("margin", "0"), ("color", "red")),
        ]
        assert [r.selector for r in detect_and_merge_duplicates(rules)] == [".a, .b"]

    def test_important_flag_prevents_merge(self):
        rules = [
            _rule(".a", ("color", "red")),
            _rule(".b", ("color", "red"), important=("color",)),
        ]
        assert len(detect_and_merge_duplicates(rules)) == 2

    def test_different_media_not_merged(self):
        rules = [
            _rule(".a", ("color", "red")),
            _rule(".a", ("color", "red"), media="(max-width: 768px)"),
        ]
        assert len(detect_and_merge_duplicates(rules)) == 2

    def test_merged_rule_takes_first_position(self):
        rules = [
            _rule(".a", ("color", "red")),
            _rule(".z", ("color", "blue")),
            _rule(".b", ("color", "red")),
        ]
        assert [r.selector for r in detect_and_merge_duplicates(rules)] == [".a, .b", ".z"]

    def test_merged_rule_loses_bem_info(self):
        first = _rule(".card__a", ("color", "red"))
        first.bem_info = BEMInfo(block="card", elements=("a",))
        merged = detect_and_merge_duplicates([first, _rule(".card__b", ("color", "red"))])
        assert merged[0].bem_info is None

    def test_same_selector_collapsed(self):
        first = _rule(".btn", ("color", "red"))
        first.bem_info = BEMInfo(block="btn")
        merged = detect_and_merge_duplicates([first, _rule(".btn", ("color", "red"))])
        assert [r.selector for r in merged] == [".btn"]
        assert merged[0].bem_info == BEMInfo(block="btn")

    def test_input_rules_not_mutated(self):
        rules = [_rule(".a", ("color", "red")), _rule(".b", ("color", "red"))]
        detect_and_merge_duplicates(rules)
        assert rules[0].selector == ".a"

    def test_comment_rules_never_merged(self):
        rules = [
            ParsedRule("/* COMMENT */", [Declaration.comment("x")], kind=RuleKind.COMMENT),
            ParsedRule("/* COMMENT */", [Declaration.comment("x")], kind=RuleKind.COMMENT),
        ]
        assert len(detect_and_merge_duplicates(rules)) == 2

    def test_empty_rules_never_merged(self):
        assert len(detect_and_merge_duplicates([_rule(".a"), _rule(".b")])) == 2

    def test_event_emitted(self):
        bus = EventBus()
        recorder = EventRecorder()
        bus.on_all(recorder)
        detect_and_merge_duplicates(
            [_rule(".a", ("color", "red")), _rule(".b", ("color", "red"))], bus
        )
        assert recorder.of_type(DuplicatesMerged) == [DuplicatesMerged((".a", ".b"), None)]


# ---------------------------------------------------------------------------
# Media grouping
# ---------------------------------------------------------------------------


class TestGroupByMediaQuery:
    def _rules(self):
        return [
            _rule(".a", ("color", "red")),
            _rule(".b", ("color", "red"), media="(x)"),
            _rule(".c", ("color", "red")),
            _rule(".d", ("color", "red"), media="(x)"),
        ]

    def test_consolidated(self):
        groups = group_by_media_query(self._rules())
        assert [(g.query, [r.selector for r in g.rules]) for g in groups] == [
            ("", [".a", ".c"]),
            ("(x)", [".b", ".d"]),
        ]

    def test_contiguous_runs(self):
        groups = group_by_media_query(self._rules(), consolidate=False)
        assert [g.query for g in groups] == ["", "(x)", "", "(x)"]

    def test_media_first(self):
        rules = [_rule(".a", ("color", "red"), media="print"), _rule(".b", ("color", "red"))]
        assert [g.query for g in group_by_media_query(rules)] == ["print", ""]
