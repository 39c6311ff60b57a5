"""Unit tests for CLI module (no I/O operations)."""

from pathlib import Path
from unittest.mock import patch

import pytest

from shadowcheck.cli import parse_args


def test_parse_args_basic() -> None:
    """Test basic argument parsing."""
    with patch("sys.argv", ["shadowcheck", "pkg.json"]):
        args = parse_args()
        assert args.targets == [Path("pkg.json")]
        assert args.strict is False
        assert args.debug is False


def test_parse_args_multiple_targets() -> None:
    """Test that several dumps can be analyzed in one run."""
    args = parse_args(["a.json", "b.json"])
    assert args.targets == [Path("a.json"), Path("b.json")]


def test_parse_args_with_strict() -> None:
    """Test argument parsing with the strict option."""
    args = parse_args(["pkg.json", "--strict"])
    assert args.strict is True


def test_parse_args_with_debug() -> None:
    """Test argument parsing with debug option."""
    args = parse_args(["--debug", "pkg.json"])
    assert args.targets == [Path("pkg.json")]
    assert args.debug is True


def test_parse_args_requires_a_target() -> None:
    """Test that running without inputs is a usage error."""
    with pytest.raises(SystemExit):
        parse_args([])
