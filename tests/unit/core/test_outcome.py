"""Unit tests for tagged outcomes."""

from __future__ import annotations

import pytest

from umldoclet.core.exceptions import PostprocessingError
from umldoclet.core.outcome import Fatal, Recoverable, Success


@pytest.mark.unit
class TestOutcome:
    """Tests for Success, Recoverable and Fatal."""

    def test_success_unwraps_to_value(self) -> None:
        """Should return the value."""
        assert Success(42).unwrap() == 42

    def test_recoverable_unwraps_to_default(self) -> None:
        """Should return the safe default and keep the warning."""
        outcome = Recoverable(frozenset(), "list unreachable")
        assert outcome.unwrap() == frozenset()
        assert outcome.warning == "list unreachable"

    def test_fatal_unwrap_raises_cause(self) -> None:
        """Should raise the fatal cause instead of returning."""
        cause = PostprocessingError("Cannot delete page.html", "page.html")
        with pytest.raises(PostprocessingError, match="Cannot delete") as excinfo:
            Fatal(cause).unwrap()
        assert excinfo.value is cause

    def test_variants_are_matchable(self) -> None:
        """Should support structural pattern matching."""
        match Recoverable(0, "warn"):
            case Success():
                pytest.fail("matched Success")
            case Recoverable(default=default, warning=warning):
                assert (default, warning) == (0, "warn")
