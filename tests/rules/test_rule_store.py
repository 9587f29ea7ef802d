"""Tests for the profile-partitioned rule store."""

import pytest

from runrunrun.errors import UnknownProfileError
from runrunrun.rules.models import PatternKind
from runrunrun.rules.patterns import compile_pattern
from runrunrun.rules.store import RuleStore, normalize_profile


def test_default_profile_always_exists() -> None:
    store = RuleStore()

    profile = store.select_profile("default")

    assert profile.name == "default"
    assert profile.rules == []
    assert store.select_profile("") is profile
    assert store.select_profile(None) is profile


def test_add_rule_assigns_increasing_source_order() -> None:
    store = RuleStore()

    first = store.add_rule(compile_pattern("*.txt"), "vim", "default")
    second = store.add_rule(compile_pattern("*.txt"), "code", "default")

    assert first.source_order < second.source_order
    assert [rule.command_template for rule in store.select_profile("default").rules] == [
        "vim",
        "code",
    ]


def test_source_order_is_global_across_profiles() -> None:
    store = RuleStore()

    a = store.add_rule(compile_pattern("*.txt"), "vim", "default")
    b = store.add_rule(compile_pattern("*.txt"), "code", "work")
    c = store.add_rule(compile_pattern("*.txt"), "nano", "default")

    assert a.source_order < b.source_order < c.source_order
    assert len(store) == 3


def test_profiles_do_not_inherit() -> None:
    store = RuleStore()
    store.add_rule(compile_pattern("*.txt"), "vim", "default")
    store.add_rule(compile_pattern("*.pdf"), "zathura", "work")

    work = store.select_profile("work")

    assert [rule.pattern.raw_text for rule in work.rules] == ["*.pdf"]


def test_unknown_profile_is_rejected() -> None:
    store = RuleStore()

    with pytest.raises(UnknownProfileError) as excinfo:
        store.select_profile("nope")

    assert excinfo.value.name == "nope"


def test_declared_profile_exists_even_when_empty() -> None:
    store = RuleStore()
    store.declare_profile("empty")

    assert store.select_profile("empty").rules == []
    assert store.profile_names() == ["default", "empty"]


def test_frozen_store_rejects_new_rules() -> None:
    store = RuleStore()
    store.freeze()

    with pytest.raises(RuntimeError):
        store.add_rule(compile_pattern("*.txt"), "vim", "default")


def test_priority_key_ranks_regex_above_glob() -> None:
    store = RuleStore()
    regex = store.add_rule(compile_pattern(r"~\.txt$"), "vim", "default")
    glob = store.add_rule(compile_pattern("*.txt"), "code", "default")

    assert regex.pattern.kind == PatternKind.REGEX
    assert regex.priority_key > glob.priority_key


def test_normalize_profile() -> None:
    assert normalize_profile(" work ") == "work"
    assert normalize_profile("  ") == "default"
