# tests/test_cli.py
"""End-to-end tests for the templateview command line."""

import json
from pathlib import Path

from click.testing import CliRunner

from templateview.cli.interface import main_cli_group


def _make_templates(base: Path) -> Path:
    root = base / "templates"
    (root / "user").mkdir(parents=True)
    (root / "legacy").mkdir()
    (root / "user" / "card.j2").write_text("Hello {{username}} ({{role}})")
    (root / "legacy" / "footer.pyt").write_text('print("(c)", ctx.get("year"))\n')
    return root


class TestRenderCommand:
    def test_render_compiled_with_vars(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(
                main_cli_group,
                ["render", "user/card", "--var", "username=ada", "--var", "role=admin"],
                catch_exceptions=False,
            )
            assert result.exit_code == 0
            assert "Hello ada (admin)" in result.output

    def test_render_raw_script_with_data_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            root = _make_templates(Path(td))
            Path("data.json").write_text(json.dumps({"year": 2024}))
            result = runner.invoke(
                main_cli_group,
                ["render", "legacy/footer", "--root", str(root), "--data-file", "data.json"],
                catch_exceptions=False,
            )
            assert result.exit_code == 0
            assert "(c) 2024" in result.output

    def test_render_to_output_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(
                main_cli_group,
                ["render", "user/card", "--var", "username=ada", "--var", "role=x", "-o", "out.txt"],
                catch_exceptions=False,
            )
            assert result.exit_code == 0
            assert Path("out.txt").read_text() == "Hello ada (x)"

    def test_profile_selects_root(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            Path("alt").mkdir()
            (Path("alt") / "only.j2").write_text("from alt")
            Path(".templateview.toml").write_text('[profiles.alt]\ntemplate_root = "alt"\n')
            result = runner.invoke(
                main_cli_group, ["--config-profile", "alt", "render", "only"], catch_exceptions=False
            )
            assert result.exit_code == 0
            assert "from alt" in result.output

    def test_missing_template_exits_with_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(main_cli_group, ["render", "ghost"])
            assert result.exit_code == 1
            assert "not found" in result.output

    def test_bad_var_is_usage_error(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(main_cli_group, ["render", "user/card", "--var", "novalue"])
            assert result.exit_code == 2


class TestResolveCommand:
    def test_resolve_reports_owner(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(main_cli_group, ["resolve", "legacy/footer"], catch_exceptions=False)
            assert result.exit_code == 0
            assert "owner: raw_script" in result.output

    def test_resolve_unknown_name(self):
        runner = CliRunner()
        with runner.isolated_filesystem() as td:
            _make_templates(Path(td))
            result = runner.invoke(main_cli_group, ["resolve", "ghost"])
            assert result.exit_code == 1


def test_version_flag():
    result = CliRunner().invoke(main_cli_group, ["--version"])
    assert result.exit_code == 0
    assert "templateview" in result.output
