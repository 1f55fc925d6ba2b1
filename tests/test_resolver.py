"""Tests for chain resolution."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from kinship_titles.errors import (
    EMPTY_INPUT_SENTINEL,
    INTERNAL_ERROR_SENTINEL,
    UNKNOWN_RELATION_SENTINEL,
    UNRECOGNIZED_SENTINEL,
)
from kinship_titles.graph import get_graph, iter_root_hops
from kinship_titles.resolver import (
    ChainResolver,
    ChainSummary,
    ResolutionSource,
    canonicalize,
    explain,
    fold_chain,
    resolve,
    tokenize,
)
from kinship_titles.tables import OVERRIDES
from kinship_titles.vocabulary import ElementaryRelation as R
from kinship_titles.vocabulary import Gender


class TestParsing:
    """Tests for canonicalization and tokenization."""

    def test_canonicalize(self):
        """Test whitespace removal and the 丈夫 -> 夫 rewrite."""
        assert canonicalize(" 丈夫 的\t父 ") == "夫的父"
        assert canonicalize("妻的父") == "妻的父"

    def test_tokenize(self):
        """Test the connective is stripped and tokens mapped."""
        assert tokenize("妻的父的子") == [R.WIFE, R.FATHER, R.SON]

    def test_tokenize_drops_unknown_characters(self):
        """Test unknown characters are ignored, not rejected."""
        assert tokenize("我的x父?") == [R.FATHER]
        assert tokenize("abc") == []

    def test_tokenize_display_spelling(self):
        """Test 妻子 reads as wife followed by son."""
        assert tokenize("妻子的父") == [R.WIFE, R.SON, R.FATHER]


class TestFold:
    """Tests for the generation/gender fold."""

    def test_single_relation(self):
        """Test the first hop seeds gender and generation."""
        assert fold_chain([R.MOTHER]) == ChainSummary(1, Gender.FEMALE, R.MOTHER)

    def test_spouse_hop_sets_gender(self):
        """Test spouse hops take the spouse's gender."""
        assert fold_chain([R.ELDER_BROTHER, R.WIFE]) == ChainSummary(0, Gender.FEMALE, R.WIFE)

    def test_lineal_hop_sets_gender(self):
        """Test parent/child hops switch to the hop's gender."""
        assert fold_chain([R.WIFE, R.FATHER]) == ChainSummary(1, Gender.MALE, R.FATHER)
        assert fold_chain([R.FATHER, R.DAUGHTER]) == ChainSummary(0, Gender.FEMALE, R.DAUGHTER)

    def test_sibling_hop_keeps_gender(self):
        """Test sibling hops keep the inherited gender."""
        assert fold_chain([R.ELDER_SISTER, R.YOUNGER_BROTHER]) == ChainSummary(
            0, Gender.FEMALE, R.YOUNGER_BROTHER
        )

    def test_generation_accumulates(self):
        """Test generation is the sum of deltas."""
        assert fold_chain([R.FATHER, R.FATHER, R.SON, R.SON, R.SON]).generation == -1

    def test_empty_chain(self):
        """Test folding nothing is an error."""
        with pytest.raises(ValueError):
            fold_chain([])


class TestResolveExamples:
    """Tests for representative chains."""

    def test_father(self):
        """Test a single relation."""
        assert resolve("父") == "父亲"

    def test_paternal_grandfather(self):
        """Test father's father."""
        assert resolve("父的父") == "爷爷"

    def test_father_in_law(self):
        """Test wife's father comes from the override table."""
        result = explain("妻的父")
        assert result.title == "岳父"
        assert result.source == ResolutionSource.OVERRIDE
        assert result.tokens == "妻父"

    def test_grandson(self):
        """Test son's son.

        子的子 is an override key that agrees with the graph, so the override
        answers it; 子子 takes the traversal route to the same title.
        """
        result = explain("子的子")
        assert result.title == "孙子"
        assert result.source == ResolutionSource.OVERRIDE
        assert explain("子子").title == result.title
        assert "子的子" not in ChainResolver().override_divergences()

    def test_graph_resolution(self):
        """Test a chain with no override is resolved by traversal."""
        result = explain("子子")
        assert result.title == "孙子"
        assert result.source == ResolutionSource.GRAPH
        assert result.tokens == "子子"

    def test_graph_collapses_cousins(self):
        """Test paternal cousin chains reach the shared cousin node."""
        assert resolve("父兄子") == resolve("父弟子") == "堂兄"
        assert resolve("母姐女") == "表姐"

    def test_whitespace_ignored(self):
        """Test whitespace anywhere in the chain is ignored."""
        assert resolve("  妻 的 父 ") == "岳父"

    def test_unknown_characters_ignored(self):
        """Test permissive parsing of stray characters."""
        assert resolve("我的父") == "父亲"


class TestStrategyOrder:
    """Tests for override > graph > arithmetic priority."""

    def test_override_beats_graph(self):
        """Test father's son uses the override, not the graph."""
        assert get_graph().walk([R.FATHER, R.SON]).title == "我"
        assert resolve("父的子") == "哥哥/弟弟"

    @pytest.mark.parametrize("key", sorted(OVERRIDES))
    def test_every_override_wins(self, key):
        """Test each override key resolves to its override value."""
        assert resolve(key) == OVERRIDES[key]

    @pytest.mark.parametrize("edge", list(iter_root_hops()), ids=lambda e: e.relation.name)
    def test_root_hops_reachable(self, edge):
        """Test every single relation resolves to its one-hop graph target."""
        result = explain(edge.relation.value)
        assert result.title == edge.target
        assert result.source == ResolutionSource.GRAPH

    def test_title_table_fallback(self):
        """Test a chain with no graph path uses the title table."""
        result = explain("弟的妹")
        assert result.title == "妹夫"
        assert result.source == ResolutionSource.TITLE_TABLE

    @pytest.mark.parametrize(
        ("chain", "title"),
        [
            ("姐的母的女", "同辈（女）"),
            ("妹的父的子", "同辈（男）"),
            ("弟子妻", "晚辈（女）"),
            ("父的父的父的父", "太爷爷辈"),
            ("母的母的母的母", "太奶奶辈"),
            ("妹的子的子", UNKNOWN_RELATION_SENTINEL),
        ],
    )
    def test_generic_fallback(self, chain, title):
        """Test chains with no path and no table entry get a generic label."""
        result = explain(chain)
        assert result.title == title
        assert result.source == ResolutionSource.GENERIC


class TestHusbandSynonym:
    """Tests for the 丈夫/夫 synonym."""

    def test_both_spellings_agree(self):
        """Test both spellings go through the same strategy."""
        long_form = explain("丈夫的父")
        short_form = explain("夫的父")
        assert long_form.title == short_form.title == "公公"
        assert long_form.source == short_form.source == ResolutionSource.OVERRIDE

    def test_canonical_form_is_single_character(self):
        """Test 夫 is the canonical spelling."""
        assert canonicalize("丈夫") == R.HUSBAND.value == "夫"

    def test_canonical_retry(self):
        """Test a key present only in 夫 form is found from 丈夫 input."""
        assert "女的丈夫" not in OVERRIDES
        assert resolve("女的丈夫") == "女婿"

    def test_raw_key_checked_first(self):
        """Test the 丈夫 spelling is looked up before canonicalization."""
        resolver = ChainResolver(overrides={"丈夫的父": "raw", "夫的父": "canonical"})
        assert resolver.resolve("丈夫的父") == "raw"
        assert resolver.resolve("夫的父") == "canonical"

    def test_graph_path_for_synonym(self):
        """Test both spellings traverse identically without overrides."""
        resolver = ChainResolver(overrides={})
        assert resolver.explain("丈夫的兄") == resolver.explain("夫的兄")
        assert resolver.resolve("丈夫的兄") == "大伯"


class TestSentinels:
    """Tests for invalid input."""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
    def test_empty_input(self, text):
        """Test blank input gets the empty-input sentinel."""
        result = explain(text)
        assert result.title == EMPTY_INPUT_SENTINEL
        assert result.source == ResolutionSource.SENTINEL

    @pytest.mark.parametrize("text", ["abc", "的的", "我"])
    def test_unrecognized(self, text):
        """Test input with no tokens gets the unrecognized sentinel."""
        assert resolve(text) == UNRECOGNIZED_SENTINEL
        assert UNRECOGNIZED_SENTINEL != EMPTY_INPUT_SENTINEL

    def test_non_string_input(self):
        """Test a bad argument type does not raise."""
        assert resolve(123) == INTERNAL_ERROR_SENTINEL  # type: ignore[arg-type]

    def test_internal_fault(self):
        """Test an unexpected exception is mapped to the error sentinel."""

        class BrokenGraph:
            def walk(self, relations):
                raise RuntimeError("boom")

        resolver = ChainResolver(graph=BrokenGraph(), overrides={})  # type: ignore[arg-type]
        assert resolver.resolve("父") == INTERNAL_ERROR_SENTINEL


class TestDeterminism:
    """Tests for repeatability and shared use."""

    def test_same_input_same_output(self):
        """Test repeated calls agree."""
        for chain in ("父的父", "姐的母的女", "子子", "", "abc"):
            assert resolve(chain) == resolve(chain)

    def test_concurrent_calls(self):
        """Test a shared resolver gives the same answers across threads."""
        resolver = ChainResolver()
        chains = ["父的父", "妻的兄的子", "姐的母的女", "子子", "丈夫的妹", "", "abc"] * 20
        expected = [resolver.resolve(c) for c in chains]
        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(resolver.resolve, chains)) == expected


class TestOverrideDivergences:
    """Tests for the override/graph audit."""

    def test_divergent_keys(self):
        """Test overrides that disagree with the graph are reported."""
        divergent = ChainResolver().override_divergences()
        assert divergent["父的子"] == ("哥哥/弟弟", "我")
        assert "妻的父" not in divergent
        assert "兄的子" not in divergent
