"""Helper utilities for constructing temporary Laravel projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Mapping


class ProjectBuilder:
    """Writes a throwaway Laravel project with a PSR-4 ``App\\`` namespace."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self.write_json(
            "composer.json",
            {"autoload": {"psr-4": {"App\\": "app/"}}},
        )

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_json(self, relative: str, payload: object) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    def controller(self, name: str, body: str) -> None:
        """Write ``app/Http/Controllers/<name>.php`` with ``body`` as class body."""
        source = (
            "<?php\n\n"
            "namespace App\\Http\\Controllers;\n\n"
            "use Spatie\\QueryBuilder\\AllowedFilter;\n"
            "use Spatie\\QueryBuilder\\QueryBuilder;\n\n"
            f"class {name}\n{{\n{textwrap.dedent(body).strip(chr(10))}\n}}\n"
        )
        path = self.root / "app" / "Http" / "Controllers" / f"{name}.php"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
