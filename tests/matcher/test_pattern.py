"""Tests for pattern compilation."""

import pytest

from permgate.errors import InvalidPatternError
from permgate.matcher.models import ANY_LABEL, MatchMode, TokenKind
from permgate.matcher.pattern import compile_pattern, split_label, tokenize


class TestSplitLabel:
    def test_unlabelled(self) -> None:
        assert split_label("git status") == (ANY_LABEL, "git status")

    def test_labelled(self) -> None:
        assert split_label("Bash(npm test*)") == ("Bash", "npm test*")

    def test_nested_parentheses_stay_in_body(self) -> None:
        assert split_label("Bash(echo (hi))") == ("Bash", "echo (hi)")

    def test_path_label(self) -> None:
        assert split_label("Read(**/.env)") == ("Read", "**/.env")

    def test_unbalanced_wrapper_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="unbalanced"):
            split_label("Bash(npm test")

    def test_unclosed_inner_parenthesis_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="unbalanced"):
            split_label("Bash(echo (a)")

    @pytest.mark.parametrize("source", ["file(1).txt", "f(x) && g", "cat report(final).pdf"])
    def test_closed_parentheses_stay_literal(self, source: str) -> None:
        assert split_label(source) == (ANY_LABEL, source)

    def test_wrapper_closing_early_is_literal(self) -> None:
        assert split_label("run(a) | tee(b)") == (ANY_LABEL, "run(a) | tee(b)")

    def test_literal_with_parentheses_compiles_and_matches(self) -> None:
        p = compile_pattern("file(1).txt")
        assert p.label == ANY_LABEL
        assert p.matches("file(1).txt")
        assert not p.matches("file1.txt")


class TestTokenize:
    def test_literal_only(self) -> None:
        tokens = tokenize("git status")
        assert [t.kind for t in tokens] == [TokenKind.LITERAL]
        assert tokens[0].text == "git status"

    def test_mixed(self) -> None:
        tokens = tokenize("cat **/secrets/*")
        assert [t.kind for t in tokens] == [
            TokenKind.LITERAL,
            TokenKind.GLOBSTAR,
            TokenKind.LITERAL,
            TokenKind.STAR,
        ]
        assert [t.text for t in tokens] == ["cat ", "**", "/secrets/", "*"]

    def test_empty(self) -> None:
        assert tokenize("") == ()

    def test_triple_star_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="ambiguous wildcard"):
            tokenize("a***b")


class TestCompilePattern:
    def test_fields(self) -> None:
        p = compile_pattern("Bash(npm test*)")
        assert p.source == "Bash(npm test*)"
        assert p.label == "Bash"
        assert p.body == "npm test*"
        assert p.literal_prefix == "npm test"
        assert p.has_wildcard is True

    def test_leading_wildcard_has_no_literal_prefix(self) -> None:
        p = compile_pattern("*--force*")
        assert p.literal_prefix == ""

    def test_empty_rejected_by_default(self) -> None:
        with pytest.raises(InvalidPatternError, match="empty pattern"):
            compile_pattern("")

    def test_empty_label_body_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="empty pattern"):
            compile_pattern("Bash()")

    def test_empty_allowed_when_permitted(self) -> None:
        p = compile_pattern("", allow_empty=True)
        assert p.tokens == ()

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="expected a string"):
            compile_pattern(42)

    def test_triple_star_reports_source(self) -> None:
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_pattern("Bash(rm ***)")
        assert exc_info.value.pattern == "Bash(rm ***)"

    def test_equality_ignores_compiled_regex(self) -> None:
        assert compile_pattern("ls *") == compile_pattern("ls *")


class TestLiteralMatching:
    def test_exact_candidate(self) -> None:
        assert compile_pattern("git status").matches("git status")

    def test_prefix_candidate(self) -> None:
        assert compile_pattern("git status").matches("git status --short")

    def test_not_anchored_elsewhere(self) -> None:
        assert not compile_pattern("git status").matches("echo git status")

    def test_exact_mode_rejects_longer_candidate(self) -> None:
        p = compile_pattern("git status")
        assert p.matches("git status", MatchMode.EXACT)
        assert not p.matches("git status --short", MatchMode.EXACT)

    def test_regex_metacharacters_are_literal(self) -> None:
        p = compile_pattern("cat a.b")
        assert p.matches("cat a.b")
        assert not p.matches("cat axb")


class TestSingleSegmentWildcard:
    @pytest.mark.parametrize(
        "candidate",
        ["npm test", "npm test:unit", "npm test -- --coverage"],
    )
    def test_trailing_star(self, candidate: str) -> None:
        assert compile_pattern("npm test*").matches(candidate)

    def test_does_not_cross_separator(self) -> None:
        p = compile_pattern("ls *.py")
        assert p.matches("ls main.py")
        assert not p.matches("ls src/main.py")

    def test_exact_mode_stops_at_separator(self) -> None:
        p = compile_pattern("*")
        assert p.matches("a/b")
        assert not p.matches("a/b", MatchMode.EXACT)


class TestCrossSegmentWildcard:
    def test_nested_path(self) -> None:
        p = compile_pattern("cat **/secrets/**")
        assert p.matches("cat config/secrets/api.key")
        assert p.matches("cat a/b/c/secrets/d/e")

    def test_requires_segment(self) -> None:
        assert not compile_pattern("cat **/secrets/**").matches("cat secrets.txt")

    def test_globstar_then_star(self) -> None:
        p = compile_pattern("src/**/*.py")
        assert p.matches("src/pkg/mod.py", MatchMode.EXACT)
        assert p.matches("src/a/b/c.py", MatchMode.EXACT)
        assert not p.matches("src/a/b/c.txt", MatchMode.EXACT)

    def test_exact_mode_globstar(self) -> None:
        assert compile_pattern("**").matches("a/b/c", MatchMode.EXACT)


class TestEmptyCandidate:
    def test_literal_does_not_match(self) -> None:
        assert not compile_pattern("git").matches("")

    @pytest.mark.parametrize("source", ["*", "**", "Bash(*)"])
    def test_wildcard_only_matches(self, source: str) -> None:
        assert compile_pattern(source).matches("")

    def test_empty_pattern_matches_only_empty(self) -> None:
        p = compile_pattern("", allow_empty=True)
        assert p.matches("")
        assert not p.matches("anything")
        assert not p.matches("anything", MatchMode.EXACT)
