# tests/conftest.py

import json
from pathlib import Path

import pytest

from diamant.core.models import ComponentDefinition
from diamant.core.registry import ComponentRegistry
from diamant.core.manifest import ManifestStore
from diamant.core.filesystem import TemplateStore
from diamant.core.transform import ContentTransform
from diamant.core.reconcile import ReconciliationEngine

BUTTON_TSX = """import * as React from "react";
import { cn } from "../../lib/utils";

export function Button(props: React.ButtonHTMLAttributes<HTMLButtonElement>) {
    return <button className={cn("btn")} {...props} />;
}
"""

CAROUSEL_TSX = """import * as React from "react";
import { ChevronLeft } from "lucide-react";
import { cn } from "../../lib/utils";
import { Button } from "./Button";

export function Carousel() {
    return <div className={cn("carousel")}><Button><ChevronLeft /></Button></div>;
}
"""

DIALOG_TSX = """import * as React from "react";
import { X } from "lucide-react";
import { cn } from '../../lib/utils';

export function Dialog() {
    return <div className={cn("dialog")}><X /></div>;
}
"""

FORM_TSX = """import { cn } from "../../lib/utils";
export function Form() { return <form className={cn("form")} />; }
"""

FORM_FIELD_TSX = """import { cn } from "../../lib/utils";
export function FormField() { return <div className={cn("field")} />; }
"""

# --- MockConsole to capture output ---
class MockConsole:
    """Captures print/log calls made through ConsoleAware."""
    def __init__(self):
        self.logs = []
        self.prints = []

    def log(self, *objects, **kwargs):
        self.logs.append(" ".join(map(str, objects)))

    def print(self, *objects, **kwargs):
        self.prints.append(" ".join(map(str, objects)))

    @property
    def output(self) -> str:
        return "\n".join(self.prints)

# --------------------------------------------------------------------------- #
# Fixtures
# --------------------------------------------------------------------------- #
@pytest.fixture
def mock_console() -> MockConsole:
    return MockConsole()

@pytest.fixture
def fake_registry() -> ComponentRegistry:
    """Small registry: carousel → button, form → button (two files), dialog standalone."""
    return ComponentRegistry([
        ComponentDefinition(id="button", name="Button", description="A button", files=("Button.tsx",)),
        ComponentDefinition(
            id="carousel",
            name="Carousel",
            description="A slideshow",
            dependencies=("lucide-react",),
            internal_dependencies=("button",),
            files=("Carousel.tsx",),
        ),
        ComponentDefinition(
            id="dialog",
            name="Dialog",
            description="A modal",
            dependencies=("lucide-react",),
            files=("Dialog.tsx",),
        ),
        ComponentDefinition(
            id="form",
            name="Form",
            description="A form with fields",
            dependencies=("react-hook-form", "lucide-react"),
            internal_dependencies=("button",),
            files=("Form.tsx", "FormField.tsx"),
        ),
    ])

@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    d = tmp_path / "templates"
    d.mkdir()
    (d / "Button.tsx").write_text(BUTTON_TSX, encoding="utf-8")
    (d / "Carousel.tsx").write_text(CAROUSEL_TSX, encoding="utf-8")
    (d / "Dialog.tsx").write_text(DIALOG_TSX, encoding="utf-8")
    (d / "Form.tsx").write_text(FORM_TSX, encoding="utf-8")
    (d / "FormField.tsx").write_text(FORM_FIELD_TSX, encoding="utf-8")
    return d

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project with src/ layout and an empty diamant.json."""
    d = tmp_path / "app"
    (d / "src").mkdir(parents=True)
    manifest = {
        "typescript": True,
        "tailwind": {"config": "tailwind.config.js", "css": "src/app/globals.css"},
        "aliases": {"components": "src/components/ui", "utils": "src/lib"},
        "installedComponents": [],
    }
    (d / "diamant.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return d

@pytest.fixture
def engine(fake_registry, templates_dir, project_dir) -> ReconciliationEngine:
    return ReconciliationEngine(
        fake_registry,
        ManifestStore(project_dir),
        TemplateStore(templates_dir),
        ContentTransform("@/lib/utils"),
    )

def read_manifest(project_dir: Path) -> dict:
    return json.loads((project_dir / "diamant.json").read_text(encoding="utf-8"))

@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path, monkeypatch) -> Path:
    """Point ~/.diamant at a temp dir and clear overrides from the environment."""
    home = tmp_path / "diamant-home"
    monkeypatch.setenv("DIAMANT_HOME", str(home))
    monkeypatch.delenv("DIAMANT_TEMPLATES_DIR", raising=False)
    monkeypatch.delenv("DIAMANT_PACKAGE_MANAGER", raising=False)
    return home
