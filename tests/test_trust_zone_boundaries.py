"""Trust-zone dependency rules enforced from docs/trust_zone.md."""

from __future__ import annotations

import ast
import importlib.util
import re
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
_PACKAGE = _ROOT / "docsmith"
_DOC = _ROOT / "docs" / "trust_zone.md"
_ZONE_NAMES = {"Privileged", "Orchestrator", "Pure"}
_ALLOWED_TARGET_ZONES = {
    "Privileged": {"Privileged", "Pure"},
    "Orchestrator": {"Privileged", "Orchestrator", "Pure"},
    "Pure": {"Pure"},
}
_BULLET_RE = re.compile(r"^\s*-\s+`([^`]+)`")

ZoneEntries = list[tuple[tuple[str, ...], str]]


def _zone_entries() -> ZoneEntries:
    """(path parts, zone) pairs from the mapping section, longest prefix first."""
    entries: ZoneEntries = []
    in_mapping = False
    current_zone: str | None = None
    for line in _DOC.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped == "Current Directory Mapping":
            in_mapping = True
            continue
        if not in_mapping:
            continue
        if stripped in {"Dependency Rules", "Contributor Checklist"}:
            break

        match = _BULLET_RE.match(line)
        if not match:
            continue
        token = match.group(1).strip()
        if token in _ZONE_NAMES:
            current_zone = token
        elif current_zone is not None:
            parts = tuple(part for part in token.strip("/").split("/") if part)
            if parts:
                entries.append((parts, current_zone))

    entries.sort(key=lambda item: len(item[0]), reverse=True)
    return entries


def _zone_for(parts: tuple[str, ...], entries: ZoneEntries) -> str | None:
    for prefix, zone in entries:
        if parts[: len(prefix)] == prefix:
            return zone
    return None


def _module_parts(path: Path) -> tuple[str, ...]:
    parts = path.relative_to(_ROOT).with_suffix("").parts
    return parts[:-1] if parts[-1] == "__init__" else parts


def _docsmith_imports(path: Path) -> list[str]:
    module = ".".join(_module_parts(path))
    package = module if path.name == "__init__.py" else module.rsplit(".", 1)[0]
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))

    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0:
                imports.append(node.module or "")
            else:
                imports.append(importlib.util.resolve_name("." * node.level + (node.module or ""), package))
    return [name for name in imports if name.startswith("docsmith.")]


def test_trust_zone_doc_paths_exist() -> None:
    entries = _zone_entries()

    assert {zone for _, zone in entries} == _ZONE_NAMES, f"Every zone needs a mapping in {_DOC}"
    missing = sorted("/".join(parts) for parts, _ in entries if not (_ROOT / Path(*parts)).exists())
    assert not missing, "Trust-zone paths in docs do not exist:\n" + "\n".join(missing)


def test_every_module_belongs_to_a_zone() -> None:
    entries = _zone_entries()

    unzoned = [
        str(path.relative_to(_ROOT))
        for path in sorted(_PACKAGE.rglob("*.py"))
        if _zone_for(_module_parts(path), entries) is None
    ]
    assert not unzoned, "Modules missing from docs/trust_zone.md:\n" + "\n".join(unzoned)


def test_trust_zone_import_boundaries() -> None:
    entries = _zone_entries()
    violations: list[str] = []

    for path in sorted(_PACKAGE.rglob("*.py")):
        source_zone = _zone_for(_module_parts(path), entries)
        if source_zone is None:
            continue
        for module in _docsmith_imports(path):
            target_zone = _zone_for(tuple(module.split(".")), entries)
            if target_zone is not None and target_zone not in _ALLOWED_TARGET_ZONES[source_zone]:
                violations.append(f"{path.relative_to(_ROOT)}: {source_zone} imports {module} ({target_zone})")

    assert not violations, "Trust-zone import violations:\n" + "\n".join(violations)
