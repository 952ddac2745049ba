"""End-to-end: check then fix a small mixed JS/TS project through the CLI."""

import json
from pathlib import Path
from unittest.mock import Mock

from typer.testing import CliRunner

from prefer_arrow.domain.config import ConfigurationLoader
from prefer_arrow.infrastructure.config_file_loader import ConfigFileLoader
from prefer_arrow.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from prefer_arrow.infrastructure.gateways.text_fixer_gateway import TextFixerGateway
from prefer_arrow.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from prefer_arrow.infrastructure.services.guidance_service import GuidanceService
from prefer_arrow.interface.cli import EXIT_CLEAN, EXIT_VIOLATIONS, CLIAppFactory, CLIDependencies

runner = CliRunner()

UTILS_TS = """\
export function add(a: number, b: number): number {
  return a + b;
}

export const handlers = {
  onClick(event: Event) {
    console.log(event);
  },
  onHover: function (event: Event) {
    return this.hovered;
  },
};

export default function () {
  return { ready: true };
}
"""

UTILS_TS_FIXED = """\
export const add = (a: number, b: number): number => a + b;

export const handlers = {
  onClick: (event: Event) => {
    console.log(event);
  },
  onHover: function (event: Event) {
    return this.hovered;
  },
};

export default () => ({ ready: true });
"""

WIDGET_JS = """\
function Widget(el) {
  this.el = el;
}

Widget.prototype.render = function () {
  return render(this.el);
};

Widget.prototype.describe = function (name) {
  return name;
};

class Panel extends Base {
  title() {
    return 'panel';
  }
}

module.exports = function makeWidget(el) {
  return new Widget(el);
};
"""

WIDGET_JS_FIXED = """\
function Widget(el) {
  this.el = el;
}

Widget.prototype.render = function () {
  return render(this.el);
};

Widget.prototype.describe = function (name) {
  return name;
};

class Panel extends Base {
  title() {
    return 'panel';
  }
}

module.exports = (el) => new Widget(el);
"""


def _project(root: Path) -> None:
    (root / "pyproject.toml").write_text(
        '[tool.prefer-arrow]\nexclude = ["legacy"]\n', encoding="utf-8"
    )
    src = root / "src"
    (src / "legacy").mkdir(parents=True)
    (src / "legacy" / "old.js").write_text("function old() { return 1; }\n", encoding="utf-8")
    (src / "types.d.ts").write_text("declare function f(): void;\n", encoding="utf-8")
    (src / "utils.ts").write_text(UTILS_TS, encoding="utf-8")
    (src / "widget.js").write_text(WIDGET_JS, encoding="utf-8")


def _deps(root: Path) -> CLIDependencies:
    return CLIDependencies(
        config_loader=ConfigurationLoader(ConfigFileLoader.load_config_from_fs(root)),
        telemetry=Mock(),
        parser=TreeSitterGateway(),
        filesystem=FileSystemGateway(),
        fixer_gateway=TextFixerGateway(),
        guidance_service=GuidanceService(),
    )


def test_check_then_fix_project(tmp_path: Path) -> None:
    _project(tmp_path)
    app = CLIAppFactory.create_app(_deps(tmp_path))
    src = str(tmp_path / "src")

    check = runner.invoke(app, ["check", src, "--format", "json"])
    assert check.exit_code == EXIT_VIOLATIONS
    payload = json.loads(check.stdout)
    files = {Path(f["file"]).name: f["violations"] for f in payload["files"]}
    assert set(files) == {"utils.ts", "widget.js"}
    assert len(files["utils.ts"]) == 3
    assert len(files["widget.js"]) == 1

    fix = runner.invoke(app, ["fix", src, "--no-backup"])
    assert fix.exit_code == EXIT_CLEAN
    assert (tmp_path / "src" / "utils.ts").read_text(encoding="utf-8") == UTILS_TS_FIXED
    assert (tmp_path / "src" / "widget.js").read_text(encoding="utf-8") == WIDGET_JS_FIXED
    assert (tmp_path / "src" / "legacy" / "old.js").read_text(encoding="utf-8") == (
        "function old() { return 1; }\n"
    )

    recheck = runner.invoke(app, ["check", src])
    assert recheck.exit_code == EXIT_CLEAN


def test_disallow_prototype_from_config(tmp_path: Path) -> None:
    _project(tmp_path)
    (tmp_path / "pyproject.toml").write_text(
        '[tool.prefer-arrow]\ndisallowPrototype = true\nexclude = ["legacy"]\n', encoding="utf-8"
    )
    app = CLIAppFactory.create_app(_deps(tmp_path))
    result = runner.invoke(app, ["fix", str(tmp_path / "src" / "widget.js"), "--no-backup"])
    assert result.exit_code == EXIT_CLEAN
    text = (tmp_path / "src" / "widget.js").read_text(encoding="utf-8")
    # render uses this and stays; describe becomes an arrow
    assert "Widget.prototype.render = function () {" in text
    assert "Widget.prototype.describe = (name) => name;" in text
