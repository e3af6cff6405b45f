# tests/test_reconcile.py

from pathlib import Path

import pytest

from diamant.core.models import ComponentState
from diamant.core.reconcile import ReconciliationEngine, diff_summary, diff_lines
from diamant.core.manifest import ManifestStore
from diamant.core.filesystem import TemplateStore, LocalFileSystem
from diamant.core.transform import ContentTransform
from diamant.core.exceptions import FileOperationError, ManifestNotFoundError, TemplatesNotFoundError

from conftest import BUTTON_TSX, DIALOG_TSX, read_manifest

def _ui(project_dir: Path) -> Path:
    return project_dir / "src" / "components" / "ui"

# --------------------------------------------------------------------------- #
# Line diff
# --------------------------------------------------------------------------- #
def test_diff_summary_appended_line():
    summary = diff_summary("a\nb\n", "a\nb\nc\n")
    assert summary.added_blocks == 1
    assert summary.removed_blocks == 0

def test_diff_summary_removed_and_replaced():
    summary = diff_summary("a\nb\nc\nd\n", "a\nX\nd\n")
    assert summary.added_blocks == 1
    assert summary.removed_blocks == 1

def test_diff_summary_separate_blocks():
    summary = diff_summary("a\nb\nc\nd\ne\n", "a\nnew\nb\nc\ne\n")
    assert summary.added_blocks == 1
    assert summary.removed_blocks == 1

def test_diff_lines_marks_local_and_template_lines():
    lines = diff_lines("keep\nold\n", "keep\nnew\n\n")
    assert lines == [("-", "old"), ("+", "new")]

# --------------------------------------------------------------------------- #
# Classification
# --------------------------------------------------------------------------- #
def test_classify_unknown(engine):
    status = engine.classify("Nope")
    assert status.state == ComponentState.UNKNOWN
    assert status.id == "Nope"

def test_classify_missing_on_disk(engine):
    status = engine.classify("button")
    assert status.state == ComponentState.MISSING_ON_DISK
    assert status.definition.name == "Button"

def test_transformed_template_is_unmodified(engine, project_dir):
    expected = engine.expected_content("Button.tsx")
    assert '"@/lib/utils"' in expected
    (_ui(project_dir) / "Button.tsx").parent.mkdir(parents=True)
    (_ui(project_dir) / "Button.tsx").write_text(expected, encoding="utf-8")

    assert engine.classify("BUTTON").state == ComponentState.PRESENT_UNMODIFIED

def test_trailing_whitespace_is_ignored(engine, project_dir):
    LocalFileSystem().write_file(_ui(project_dir) / "Button.tsx", "\n" + engine.expected_content("Button.tsx") + "\n\n")
    assert engine.classify("button").state == ComponentState.PRESENT_UNMODIFIED

def test_untransformed_copy_is_modified(engine, project_dir):
    LocalFileSystem().write_file(_ui(project_dir) / "Button.tsx", BUTTON_TSX)

    status = engine.classify("button")

    assert status.state == ComponentState.PRESENT_MODIFIED
    assert status.diff.added_blocks == 1
    assert status.diff.removed_blocks == 1

def test_appended_line_is_modified(engine, project_dir):
    content = engine.expected_content("Button.tsx") + "export const extra = 1;\n"
    LocalFileSystem().write_file(_ui(project_dir) / "Button.tsx", content)

    status = engine.classify("button")

    assert status.state == ComponentState.PRESENT_MODIFIED
    assert status.diff.added_blocks >= 1
    assert status.diff.removed_blocks == 0

def test_bom_and_crlf_local_file_is_unmodified(engine, project_dir):
    path = _ui(project_dir) / "Button.tsx"
    path.parent.mkdir(parents=True)
    content = engine.expected_content("Button.tsx").replace("\n", "\r\n")
    path.write_bytes(b"\xef\xbb\xbf" + content.encode("utf-8"))

    assert engine.classify("button").state == ComponentState.PRESENT_UNMODIFIED

# --------------------------------------------------------------------------- #
# Add
# --------------------------------------------------------------------------- #
def test_end_to_end_add_dialog(engine, project_dir):
    plan = engine.plan_add(["dialog"])
    assert plan.new == ["dialog"]
    assert not plan.needs_confirmation(overwrite=False)

    result = engine.execute_add(plan.actions(overwrite=False))

    assert result.written == [_ui(project_dir) / "Dialog.tsx"]
    assert read_manifest(project_dir)["installedComponents"] == ["dialog"]
    assert result.package_dependencies == ["lucide-react"]
    written = (_ui(project_dir) / "Dialog.tsx").read_text(encoding="utf-8")
    assert written == DIALOG_TSX.replace("'../../lib/utils'", '"@/lib/utils"')

def test_add_resolves_dependencies(engine, project_dir):
    plan = engine.plan_add(["Carousel"])

    assert plan.resolved == ["carousel", "button"]
    assert plan.is_dependency("button")
    assert not plan.is_dependency("carousel")

    engine.execute_add(plan.actions(overwrite=False))
    assert read_manifest(project_dir)["installedComponents"] == ["button", "carousel"]
    assert (_ui(project_dir) / "Button.tsx").is_file()

def test_add_partitions_existing_by_disk_not_manifest(engine, project_dir):
    LocalFileSystem().write_file(_ui(project_dir) / "Button.tsx", "// my button\n")

    plan = engine.plan_add(["carousel"])

    assert plan.existing == ["button"]
    assert plan.new == ["carousel"]
    assert plan.needs_confirmation(overwrite=False)
    assert not plan.needs_confirmation(overwrite=True)
    assert plan.actions(overwrite=False) == ["carousel"]
    assert plan.actions(overwrite=True) == ["carousel", "button"]

def test_declined_overwrite_keeps_existing_file(engine, project_dir):
    LocalFileSystem().write_file(_ui(project_dir) / "Button.tsx", "// my button\n")

    plan = engine.plan_add(["carousel"])
    engine.execute_add(plan.actions(overwrite=False))

    assert (_ui(project_dir) / "Button.tsx").read_text(encoding="utf-8") == "// my button\n"
    assert read_manifest(project_dir)["installedComponents"] == ["carousel"]

def test_add_with_overwrite_is_idempotent(engine, project_dir):
    first = engine.execute_add(engine.plan_add(["form"]).actions(overwrite=True))
    contents = {p: p.read_text(encoding="utf-8") for p in first.written}
    manifest_after_first = read_manifest(project_dir)["installedComponents"]

    second = engine.execute_add(engine.plan_add(["form"]).actions(overwrite=True))

    assert {p: p.read_text(encoding="utf-8") for p in second.written} == contents
    assert read_manifest(project_dir)["installedComponents"] == manifest_after_first == ["button", "form"]

def test_multi_file_component_writes_every_file(engine, project_dir):
    result = engine.execute_add(["form"])
    assert [p.name for p in result.written] == ["Form.tsx", "FormField.tsx"]
    assert sorted(result.package_dependencies) == ["lucide-react", "react-hook-form"]

def test_add_reports_unknown_and_continues(engine, project_dir):
    plan = engine.plan_add(["button", "not-a-real-component"])
    assert plan.unknown == ["not-a-real-component"]
    assert plan.new == ["button"]

def test_failed_write_leaves_prior_files_and_skips_manifest(engine, project_dir, templates_dir):
    (templates_dir / "FormField.tsx").unlink()

    with pytest.raises(FileOperationError):
        engine.execute_add(["form"])

    assert (_ui(project_dir) / "Form.tsx").is_file()
    assert not (_ui(project_dir) / "FormField.tsx").exists()
    assert read_manifest(project_dir)["installedComponents"] == []

def test_missing_templates_dir(fake_registry, project_dir, tmp_path):
    engine = ReconciliationEngine(
        fake_registry,
        ManifestStore(project_dir),
        TemplateStore(tmp_path / "nowhere"),
        ContentTransform("@/lib/utils"),
    )
    with pytest.raises(TemplatesNotFoundError):
        engine.execute_add(["button"])

# --------------------------------------------------------------------------- #
# Remove
# --------------------------------------------------------------------------- #
def test_remove_warns_about_dependents_but_still_removes(engine, project_dir):
    engine.execute_add(["carousel", "button"])

    plan = engine.plan_remove(["button"])

    assert plan.to_remove == ["button"]
    assert plan.dependents == ["carousel"]

    engine.execute_remove(plan.to_remove)
    assert not (_ui(project_dir) / "Button.tsx").exists()
    assert (_ui(project_dir) / "Carousel.tsx").exists()
    assert read_manifest(project_dir)["installedComponents"] == ["carousel"]

def test_remove_dependent_together_is_not_warned(engine):
    engine.execute_add(["carousel", "button"])
    plan = engine.plan_remove(["button", "carousel"])
    assert plan.dependents == []

def test_remove_classifies_unknown_and_not_installed(engine):
    engine.execute_add(["button"])

    plan = engine.plan_remove(["Button", "dialog", "ghost"])

    assert plan.to_remove == ["button"]
    assert plan.not_installed == ["dialog"]
    assert plan.unknown == ["ghost"]

def test_remove_then_add_round_trip(engine, project_dir):
    engine.execute_add(["dialog"])
    engine.execute_remove(engine.plan_remove(["dialog"]).to_remove)
    assert read_manifest(project_dir)["installedComponents"] == []

    engine.execute_add(engine.plan_add(["dialog"]).actions(overwrite=False))

    assert read_manifest(project_dir)["installedComponents"] == ["dialog"]
    assert (_ui(project_dir) / "Dialog.tsx").read_text(encoding="utf-8") == engine.expected_content("Dialog.tsx")

def test_remove_deletes_every_file(engine, project_dir):
    engine.execute_add(["form"])
    deleted = engine.execute_remove(["form"])
    assert [p.name for p in deleted] == ["Form.tsx", "FormField.tsx"]
    assert not (_ui(project_dir) / "FormField.tsx").exists()

# --------------------------------------------------------------------------- #
# Update
# --------------------------------------------------------------------------- #
def test_update_defaults_to_installed_and_restores_modified(engine, project_dir):
    engine.execute_add(["carousel", "button", "dialog"])
    dialog = _ui(project_dir) / "Dialog.tsx"
    dialog.write_text(dialog.read_text(encoding="utf-8") + "// local tweak\n", encoding="utf-8")

    plan = engine.plan_update([])

    assert plan.modified == ["dialog"]
    assert sorted(plan.unmodified) == ["button", "carousel"]

    engine.execute_update(plan.modified)
    assert engine.classify("dialog").state == ComponentState.PRESENT_UNMODIFIED

def test_update_skips_unknown_and_missing(engine, project_dir):
    engine.execute_add(["button"])
    (_ui(project_dir) / "Button.tsx").unlink()

    plan = engine.plan_update(["button", "ghost"])

    assert plan.modified == []
    assert plan.missing == ["button"]
    assert plan.unknown == ["ghost"]

# --------------------------------------------------------------------------- #
# Diff
# --------------------------------------------------------------------------- #
def test_diff_report_covers_manifest_entries(engine, project_dir):
    engine.execute_add(["dialog", "button"])
    store = ManifestStore(project_dir)
    store.add_installed("carousel")
    (_ui(project_dir) / "Button.tsx").write_text("// rewritten\n", encoding="utf-8")

    report = {s.id: s for s in engine.diff_report()}

    assert report["carousel"].state == ComponentState.MISSING_ON_DISK
    assert report["dialog"].state == ComponentState.PRESENT_UNMODIFIED
    assert report["button"].state == ComponentState.PRESENT_MODIFIED
    assert report["button"].diff.removed_blocks >= 1

def test_diff_component_lines(engine, project_dir):
    engine.execute_add(["dialog"])
    dialog = _ui(project_dir) / "Dialog.tsx"
    dialog.write_text(dialog.read_text(encoding="utf-8") + "// mine\n", encoding="utf-8")

    result = engine.diff_component("dialog")

    assert result.status.state == ComponentState.PRESENT_MODIFIED
    assert result.lines == [("+", "// mine")]

def test_diff_component_unmodified_has_no_lines(engine):
    engine.execute_add(["dialog"])
    assert engine.diff_component("dialog").lines == []

# --------------------------------------------------------------------------- #
# Construction
# --------------------------------------------------------------------------- #
def test_for_project_requires_manifest(fake_registry, templates_dir, tmp_path):
    with pytest.raises(ManifestNotFoundError):
        ReconciliationEngine.for_project(tmp_path, fake_registry, TemplateStore(templates_dir))

def test_for_project_builds_transform_from_aliases(fake_registry, templates_dir, project_dir):
    engine = ReconciliationEngine.for_project(project_dir, fake_registry, TemplateStore(templates_dir))
    assert engine.transform.import_path == "@/lib/utils"
    assert engine.components_dir == project_dir / "src/components/ui"

def test_diff_report_continues_past_unreadable_template(engine, project_dir, templates_dir):
    engine.execute_add(["dialog", "button"])
    (templates_dir / "Dialog.tsx").unlink()

    report = {s.id: s for s in engine.diff_report()}

    assert report["dialog"].state == ComponentState.ERROR
    assert "Dialog.tsx" in report["dialog"].error
    assert report["dialog"].display_name == "Dialog"
    assert report["button"].state == ComponentState.PRESENT_UNMODIFIED

def test_blank_line_only_edit_is_modified_without_lines(engine, project_dir):
    engine.execute_add(["dialog"])
    dialog = _ui(project_dir) / "Dialog.tsx"
    content = dialog.read_text(encoding="utf-8").replace("\n", "\n\n", 1)
    dialog.write_text(content, encoding="utf-8")

    result = engine.diff_component("dialog")

    assert result.status.state == ComponentState.PRESENT_MODIFIED
    assert result.lines == []
