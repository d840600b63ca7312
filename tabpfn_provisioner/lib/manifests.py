from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import ManifestError


@dataclass(frozen=True)
class Requirement:
    """A package name plus an optional version constraint (``>=1.0``, ``==2.3``)."""

    name: str
    constraint: Optional[str] = None

    def spec(self) -> str:
        return f"{self.name}{self.constraint or ''}"

    @classmethod
    def pinned(cls, name: str, version: Optional[str]) -> "Requirement":
        return cls(name=name, constraint=f"=={version}" if version else None)


def _manifest_root() -> Path:
    # tabpfn_provisioner/lib/manifests.py -> tabpfn_provisioner/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml_rel(rel_path: str) -> Dict[str, Any]:
    """Load a YAML file shipped in the package ``manifests/`` directory."""
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ManifestError("PyYAML required to load manifests") from e

    p = _manifest_root() / rel_path.lstrip("/")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {p}")
    return data


def parse_requirements(entries: Any, *, source: str) -> List[Requirement]:
    if not isinstance(entries, list):
        raise ManifestError(f"{source}: expected a list of packages")

    reqs: List[Requirement] = []
    for entry in entries:
        if not isinstance(entry, dict) or not str(entry.get("name") or "").strip():
            raise ManifestError(f"{source}: every package needs a name, got {entry!r}")
        constraint = str(entry.get("constraint") or "").strip() or None
        reqs.append(Requirement(name=str(entry["name"]).strip(), constraint=constraint))
    return reqs


def load_dev_packages() -> List[Requirement]:
    manifest = load_yaml_rel("dev_packages.yaml")
    return parse_requirements(manifest.get("dev_packages"), source="manifests/dev_packages.yaml")
