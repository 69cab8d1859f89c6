"""Regression tests for environment and version domain contracts."""

from pathlib import Path

import pytest

from appenv.domain import AppMode, CaseInsensitiveMapping, ConfigurationError, EnvironmentResult, domain_version_parse


def test_domain_environment_result_derives_child_directories() -> None:
    """Derive config and log directories as direct children of the root.

    Returns:
        None: Assertions validate directory derivation.

    Raises:
        AssertionError: Raised when derived directories are incorrect.
    """

    result = EnvironmentResult.from_root(AppMode.CUSTOM_ROOT, "/srv/app/")

    assert result.app_root == Path("/srv/app")
    assert result.config_dir == Path("/srv/app/config")
    assert result.log_dir == Path("/srv/app/log")
    assert result.config_dir.parent == result.app_root
    assert result.log_dir.parent == result.app_root


@pytest.mark.parametrize("root", ["", "  ", "relative/root", "C:relative"])
def test_domain_environment_result_rejects_blank_or_relative_roots(root: str) -> None:
    """Reject roots that are blank or relative.

    Args:
        root: Invalid root candidate.

    Returns:
        None: Assertions validate root invariants.

    Raises:
        AssertionError: Raised when an invalid root is accepted.
    """

    with pytest.raises(ConfigurationError):
        EnvironmentResult.from_root(AppMode.CUSTOM_ROOT, root)


def test_domain_case_insensitive_mapping_lookup_and_iteration() -> None:
    """Look keys up regardless of case and iterate first-seen spellings.

    Returns:
        None: Assertions validate mapping behavior.

    Raises:
        AssertionError: Raised when mapping behavior is incorrect.
    """

    mapping = CaseInsensitiveMapping([("Branch", "main"), ("Sha", "abc"), ("BRANCH", "release")])

    assert mapping["branch"] == "release"
    assert "SHA" in mapping
    assert 1 not in mapping
    assert list(mapping) == ["Branch", "Sha"]
    assert mapping == {"Branch": "release", "Sha": "abc"}
    assert mapping.get("missing") is None
    with pytest.raises(KeyError):
        _ = mapping["missing"]


def test_domain_version_info_is_hashable_with_metadata() -> None:
    """Hash parsed versions so equal builds collapse in sets and dict keys.

    Returns:
        None: Assertions validate hash and equality agreement.

    Raises:
        AssertionError: Raised when equal versions hash differently.
    """

    first = domain_version_parse("2.3.177+BuildCounter.4941.Branch.production")
    second = domain_version_parse("2.3.177+BuildCounter.4941.Branch.production")
    other = domain_version_parse("2.3.177+BuildCounter.4942.Branch.production")

    assert hash(first) == hash(second)
    assert len({first, second, other}) == 2
    assert hash(CaseInsensitiveMapping([("Sha", "abc")])) == hash(CaseInsensitiveMapping([("Sha", "abc")]))
