"""Build version string parsing helpers.

A build version string has the form `<semver>[+Key1.Value1.Key2.Value2...]`,
for example `2.3.177+BuildCounter.4941.Branch.production.Sha.abc123`. Keys are
alphabetic and values never contain a dot. Known keys are projected into typed
`VersionInfo` fields; every pair stays available in `VersionInfo.extra`.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from importlib import metadata
from typing import Final

from .errors import MalformedInputError
from .models import VERSION_BUILT_AT_UNSET, CaseInsensitiveMapping, VersionInfo

_DOMAIN_VERSION_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"([A-Za-z]+)\.([^.]+)")
_DOMAIN_VERSION_INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")
_DOMAIN_VERSION_INT32_MIN: Final[int] = -(2**31)
_DOMAIN_VERSION_INT32_MAX: Final[int] = 2**31 - 1

VERSION_KEY_BUILD_COUNTER: Final[str] = "BuildCounter"
VERSION_KEY_BRANCH: Final[str] = "Branch"
VERSION_KEY_DATE_TIME: Final[str] = "DateTime"
VERSION_KEY_ENV: Final[str] = "Env"
VERSION_KEY_SHA: Final[str] = "Sha"
VERSION_KEY_GIT_COMMITS: Final[str] = "GitCommits"


def domain_version_parse(raw: str) -> VersionInfo:
    """Parse one raw build version string without a known product name.

    Args:
        raw: Raw version string, e.g. `1.2.3+BuildCounter.7.Branch.main`.

    Returns:
        VersionInfo: Parsed version with an empty product name.

    Raises:
        MalformedInputError: Raised when `raw` is blank.
    """

    return domain_version_parse_from_product(product="", raw=raw)


def domain_version_parse_from_product(product: str | None, raw: str) -> VersionInfo:
    """Parse one raw build version string for an already known product.

    Args:
        product: Product name obtained elsewhere, e.g. distribution metadata.
        raw: Raw version string.

    Returns:
        VersionInfo: Parsed version seeded with `product`.

    Raises:
        MalformedInputError: Raised when `raw` is blank.
    """

    if raw is None or not str(raw).strip():
        raise MalformedInputError("version string must not be blank")

    sem_ver, _, metadata_text = str(raw).partition("+")
    extra = CaseInsensitiveMapping(
        (match.group(1), match.group(2)) for match in _DOMAIN_VERSION_TOKEN_PATTERN.finditer(metadata_text)
    )

    return VersionInfo(
        product=product or "",
        sem_ver=sem_ver,
        build_counter=_domain_version_parse_int(extra.get(VERSION_KEY_BUILD_COUNTER)),
        branch=extra.get(VERSION_KEY_BRANCH, ""),
        built_at=_domain_version_parse_timestamp(extra.get(VERSION_KEY_DATE_TIME)),
        env=extra.get(VERSION_KEY_ENV, ""),
        sha=extra.get(VERSION_KEY_SHA, ""),
        git_commits=_domain_version_parse_int(extra.get(VERSION_KEY_GIT_COMMITS)),
        extra=extra,
    )


def domain_version_read_installed(distribution: str) -> VersionInfo:
    """Read and parse the version of an installed distribution.

    PEP 440 normalizes local version labels to lowercase, so
    `1.0.0+buildcounter.12.branch.main` still maps onto the typed fields.

    Args:
        distribution: Distribution name as published on the package index.

    Returns:
        VersionInfo: Parsed version with the distribution's declared name as product.

    Raises:
        MalformedInputError: Raised when the distribution is not installed or declares no version.
    """

    try:
        distribution_metadata = metadata.metadata(distribution)
    except metadata.PackageNotFoundError as error:
        raise MalformedInputError(f"distribution '{distribution}' is not installed") from error

    product = distribution_metadata.get("Name") or distribution
    return domain_version_parse_from_product(product=product, raw=distribution_metadata.get("Version") or "")


def _domain_version_parse_int(value: str | None) -> int:
    if value is None:
        return 0
    normalized_value = value.strip()
    if not _DOMAIN_VERSION_INTEGER_PATTERN.fullmatch(normalized_value):
        return 0
    parsed_value = int(normalized_value)
    if not _DOMAIN_VERSION_INT32_MIN <= parsed_value <= _DOMAIN_VERSION_INT32_MAX:
        return 0
    return parsed_value


def _domain_version_parse_timestamp(value: str | None) -> datetime:
    if value is None:
        return VERSION_BUILT_AT_UNSET
    normalized_value = value.strip()
    if not normalized_value:
        return VERSION_BUILT_AT_UNSET
    if normalized_value[-1] in "zZ":
        normalized_value = f"{normalized_value[:-1]}+00:00"

    try:
        parsed_value = datetime.fromisoformat(normalized_value)
    except ValueError:
        return VERSION_BUILT_AT_UNSET

    # naive build stamps are UTC by convention
    if parsed_value.tzinfo is None:
        return parsed_value.replace(tzinfo=timezone.utc)
    try:
        return parsed_value.astimezone(timezone.utc)
    except OverflowError:
        return VERSION_BUILT_AT_UNSET
