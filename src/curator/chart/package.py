"""
curator.chart.package — Chart directory → .tgz archive.

Chart directory structure:
    mychart/
    ├── Chart.yaml          ← name, version (required)
    ├── values.yaml
    ├── .helmignore         ← optional ignore patterns
    └── templates/
        └── deployment.yaml

Archive: {name}-{version}.tgz with every entry under {name}/.
"""

from __future__ import annotations

import fnmatch
import logging
import tarfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import yaml


logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"
IGNORE_FILE = ".helmignore"


class ChartError(Exception):
    pass


@dataclass
class ChartMetadata:
    """Fields read from Chart.yaml."""
    name: str
    version: str
    description: str = ""
    api_version: str = ""
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class Chart:
    """A loaded chart directory."""
    metadata: ChartMetadata
    path: Path
    files: list[PurePosixPath] = field(default_factory=list)


def is_chart_dir(path: str | Path) -> bool:
    """Validate that `path` is a chart directory.

    Raises ChartError with the reason when it is not.
    """
    path = Path(path)
    if not path.exists():
        raise ChartError(f"no such file or directory: {str(path)!r}")
    if not path.is_dir():
        raise ChartError(f"{str(path)!r} is not a directory")
    chart_file = path / CHART_FILE
    if not chart_file.is_file():
        raise ChartError(f"no {CHART_FILE} exists in directory {str(path)!r}")
    _read_chart_yaml(chart_file)
    return True


def load_chart(path: str | Path) -> Chart:
    """Load metadata and the file list of a chart directory."""
    path = Path(path)
    is_chart_dir(path)

    data = _read_chart_yaml(path / CHART_FILE)
    name = str(data.get("name") or "")
    version = str(data.get("version") or "")
    if not name:
        raise ChartError(f"chart metadata (Chart.yaml) missing name in {path}")
    if not version:
        raise ChartError(
            f"chart metadata (Chart.yaml) missing version in {path}"
        )

    metadata = ChartMetadata(
        name=name,
        version=version,
        description=str(data.get("description") or ""),
        api_version=str(data.get("apiVersion") or ""),
        raw=data,
    )
    patterns = _read_ignore_patterns(path / IGNORE_FILE)

    files = []
    for fp in sorted(path.rglob("*")):
        if not fp.is_file():
            continue
        rel = PurePosixPath(fp.relative_to(path).as_posix())
        if _is_ignored(rel, patterns):
            logger.debug("Ignoring %s", rel)
            continue
        files.append(rel)

    return Chart(metadata=metadata, path=path, files=files)


def save_chart(chart: Chart, dest_dir: str | Path) -> Path:
    """Write the chart as {dest_dir}/{name}-{version}.tgz.

    Returns:
        Path of the archive
    """
    dest_dir = Path(dest_dir)
    if not dest_dir.is_dir():
        raise ChartError(f"Destination {str(dest_dir)!r} is not a directory")

    meta = chart.metadata
    tgz_path = dest_dir / f"{meta.name}-{meta.version}.tgz"

    # Chart.yaml first, the rest in path order
    ordered = sorted(
        chart.files, key=lambda p: (str(p) != CHART_FILE, str(p)),
    )
    with tarfile.open(tgz_path, "w:gz") as tar:
        for rel in ordered:
            tar.add(
                str(chart.path / rel),
                arcname=f"{meta.name}/{rel}",
                recursive=False,
            )

    logger.debug("Packaged %s (%d files)", tgz_path, len(ordered))
    return tgz_path


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HELPERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
def _read_chart_yaml(chart_file: Path) -> dict[str, Any]:
    try:
        with open(chart_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ChartError(f"Invalid {CHART_FILE} in {chart_file.parent}: {e}") from e
    except OSError as e:
        raise ChartError(f"Unable to read {chart_file}: {e}") from e
    if not isinstance(data, dict):
        raise ChartError(f"{CHART_FILE} in {chart_file.parent} is not a mapping")
    return data


def _read_ignore_patterns(ignore_file: Path) -> list[str]:
    if not ignore_file.is_file():
        return []
    try:
        text = ignore_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ChartError(f"Invalid {IGNORE_FILE} in {ignore_file.parent}: {e}") from e
    except OSError as e:
        raise ChartError(f"Unable to read {ignore_file}: {e}") from e

    patterns = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def _is_ignored(rel: PurePosixPath, patterns: list[str]) -> bool:
    """Match a relative path against .helmignore-style patterns.

    "name" matches the file or any directory with that name,
    "dir/" matches directories only, "a/b*" is anchored at the root.
    """
    for pattern in patterns:
        dir_only = pattern.endswith("/")
        pat = pattern.rstrip("/")
        if "/" in pat:
            # Anchored: match the path or one of its parent dirs
            candidates = [str(rel)] if not dir_only else []
            candidates += [str(p) for p in rel.parents if str(p) != "."]
            if any(fnmatch.fnmatchcase(c, pat.lstrip("/")) for c in candidates):
                return True
            continue
        names = [p.name for p in rel.parents if str(p) != "."]
        if not dir_only:
            names.append(rel.name)
        if any(fnmatch.fnmatchcase(n, pat) for n in names):
            return True
    return False
