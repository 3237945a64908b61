"""Pytest configuration for repository test runs."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
for _import_root in (_PROJECT_ROOT / "src", _PROJECT_ROOT):
    if str(_import_root) not in sys.path:
        sys.path.insert(0, str(_import_root))

from tests.archive_builders import build_mela_archive, sample_mela_payload  # noqa: E402


@pytest.fixture
def fixed_uid() -> str:
    """Deterministic uid used in place of random generation."""
    return "00000000-0000-0000-0000-000000000001"


@pytest.fixture
def mela_archive(tmp_path: Path) -> Path:
    """Two-recipe Mela export in native (non-ordinal) entry order."""
    return build_mela_archive(
        tmp_path / "export.melarecipes",
        {
            "2-Green Salad.melarecipe": sample_mela_payload(
                id="salad-id", title="Green Salad", images=[], favorite=False, link="not a url"
            ),
            "1-Shakshuka.melarecipe": sample_mela_payload(),
        },
    )
