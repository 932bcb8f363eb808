"""Tests for fetchchain.__init__ — lazy imports cover all public names."""

import tomllib
from pathlib import Path

import pytest

import fetchchain


@pytest.mark.parametrize("name", fetchchain.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(fetchchain, name)
    assert obj is not None, f"fetchchain.{name} resolved to None"


def test_module_level_fetch_uses_default() -> None:
    from fetchchain.dispatcher import fetch

    assert fetchchain.fetch is fetch


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        fetchchain.__getattr__("ThisDoesNotExist")


def test_version_matches_pyproject() -> None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with pyproject.open("rb") as f:
        assert tomllib.load(f)["project"]["version"] == fetchchain.__version__
