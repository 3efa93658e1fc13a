# tests/arch/test_layering.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Clean Architecture layering guardrail using grimp import graph.

This test builds an import graph for the `polygon_rest` package and enforces
a strict layering policy:

    domain         → may depend only on domain
    application    → may depend on {domain, application}
    infrastructure → may depend on {domain, application, infrastructure}

``dependencies`` (composition root) and ``tasks`` (CLI) sit outside the
matrix and may import anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import grimp
from grimp import ImportGraph

ROOT_PACKAGE: Final[str] = "polygon_rest"

ALLOWED_DEPENDENCIES: Mapping[str, set[str]] = {
    "domain": {"domain"},
    "application": {"domain", "application"},
    "infrastructure": {"domain", "application", "infrastructure"},
}


def _build_graph() -> ImportGraph:
    """Build the import graph for the root package using grimp."""
    return grimp.build_graph(ROOT_PACKAGE)


def _layer_for_module(module_name: str) -> str | None:
    """Infer the logical layer for a module, or None for outer modules."""
    if not module_name.startswith(f"{ROOT_PACKAGE}."):
        return None

    rest = module_name[len(ROOT_PACKAGE) + 1 :]
    top = rest.split(".", 1)[0]

    if top in ALLOWED_DEPENDENCIES:
        return top
    return None


def _find_layering_violations(graph: ImportGraph) -> list[str]:
    """Scan the graph and return human-readable layering violations."""
    violations: set[str] = set()

    for importer in sorted(graph.modules):
        importer_layer = _layer_for_module(importer)
        if importer_layer is None:
            continue

        allowed_targets = ALLOWED_DEPENDENCIES[importer_layer]

        for imported in graph.find_modules_directly_imported_by(importer):
            if not imported.startswith(f"{ROOT_PACKAGE}."):
                continue

            imported_layer = _layer_for_module(imported)
            if imported_layer is None:
                # Inner layers must not reach the composition root or the CLI.
                violations.add(f"{importer} ({importer_layer}) -> {imported} (outer)")
                continue

            if imported_layer not in allowed_targets:
                violations.add(
                    f"{importer} ({importer_layer}) -> {imported} ({imported_layer}) "
                    "is not allowed by ALLOWED_DEPENDENCIES"
                )

    return sorted(violations)


def test_layering_respects_clean_architecture() -> None:
    """Ensure that high-level layering rules are respected."""
    graph = _build_graph()
    violations = _find_layering_violations(graph)

    if violations:
        message = "Layering violations detected:\n" + "\n".join(violations)
        raise AssertionError(message)


def test_domain_has_no_third_party_imports() -> None:
    """The codec and error family stay importable without httpx or pydantic."""
    graph = grimp.build_graph(ROOT_PACKAGE, include_external_packages=True)
    offenders = sorted(
        f"{module} -> {imported}"
        for module in graph.modules
        if _layer_for_module(module) == "domain"
        for imported in graph.find_modules_directly_imported_by(module)
        if imported.split(".", 1)[0] in {"httpx", "pydantic", "prometheus_client", "typer"}
    )
    assert offenders == []
