from __future__ import annotations

import json
import logging

import pytest

from booth_setup.errors import ConfigError, StepFailure
from booth_setup.main import build_steps, run, run_setup
from booth_setup.pipeline import CHANGED, FAILED, SATISFIED, SKIPPED, StepResult, run_pipeline, verify_installation
from tests.conftest import mutating_calls


class _Boom:
    step_id = "99_boom"

    def run(self, ctx):
        raise RuntimeError("unexpected")


class _Fails:
    step_id = "98_fails"

    def run(self, ctx):
        raise StepFailure("nope")


class _Ok:
    step_id = "97_ok"

    def run(self, ctx):
        return StepResult(self.step_id, CHANGED, "did it")


def test_failures_do_not_stop_the_run(ctx):
    result = run_pipeline(ctx=ctx, steps=[_Boom(), _Fails(), _Ok()])

    assert [r.status for r in result.results] == [FAILED, FAILED, CHANGED]
    assert result.by_id("99_boom").detail == "RuntimeError: unexpected"
    assert result.failed_steps == ["99_boom", "98_fails"]


def test_step_order(profile):
    ids = [s.step_id for s in build_steps(profile)]

    assert ids.index("20_install_editor") < ids.index("60_editor_extensions_code")
    assert ids.index("20_install_editor_preview") < ids.index("70_editor_theme_code_insiders")
    assert ids.index("20_install_cli") < ids.index("40_cli_auth") < ids.index("45_cli_extensions")
    assert ids[-1] == "80_demo_loader"


def test_full_run_from_scratch(make_ctx, tools, profile):
    summary = run_setup(make_ctx())

    assert summary.ok
    assert summary.pipeline.failed_steps == []
    assert tools.packages.installed == {"visual-studio-code", "visual-studio-code-insiders", "gh", "vlc"}
    assert profile.loader_path.exists()


def test_second_run_is_a_no_op(make_ctx, tools, profile, home):
    tools.cli_tool.authenticated = False

    run_setup(make_ctx())
    first_calls = mutating_calls(tools)
    snapshot = {p: p.read_bytes() for p in home.rglob("*") if p.is_file()}

    summary = run_setup(make_ctx())

    assert first_calls
    assert mutating_calls(tools) == first_calls
    assert {p: p.read_bytes() for p in home.rglob("*") if p.is_file()} == snapshot
    statuses = {r.step_id: r.status for r in summary.pipeline.results}
    assert statuses.pop("80_demo_loader") == CHANGED
    assert set(statuses.values()) == {SATISFIED}


def test_failed_install_is_retried_on_rerun(make_ctx, tools):
    tools.packages.fail.add("vlc")
    first = run_setup(make_ctx())
    assert first.pipeline.by_id("20_install_media_player").status == FAILED
    assert not first.ok
    assert first.verification.missing == ["VLC"]
    # Unrelated steps still ran.
    assert first.pipeline.by_id("70_editor_theme_code").status == CHANGED

    tools.packages.fail.clear()
    second = run_setup(make_ctx())
    assert second.pipeline.by_id("20_install_media_player").status == CHANGED
    assert second.ok


def test_auth_failure_skips_extensions_and_continues(make_ctx, tools, profile, caplog):
    tools.cli_tool.authenticated = False
    tools.cli_tool.login_succeeds = False

    with caplog.at_level(logging.WARNING):
        summary = run_setup(make_ctx())

    assert summary.pipeline.by_id("40_cli_auth").status == SKIPPED
    assert summary.pipeline.by_id("45_cli_extensions").status == SKIPPED
    assert ("install_extension", "github/gh-copilot") not in tools.cli_tool.calls
    assert any("45_cli_extensions" in rec.getMessage() for rec in caplog.records)
    assert summary.pipeline.by_id("70_editor_theme_code").status == CHANGED
    assert summary.pipeline.by_id("80_demo_loader").status == CHANGED
    assert profile.loader_path.exists()


def test_bad_config_aborts_before_any_mutation(write_config, raw_config, tools, home, tmp_path):
    del raw_config["vscode_theme"]
    path = write_config(raw_config)

    with pytest.raises(ConfigError):
        run(
            config_path=str(path),
            log_path=str(tmp_path / "setup.log"),
            platform_name="macos",
            home=home,
            tools=tools,
        )

    assert mutating_calls(tools) == []
    assert tools.packages.calls == []
    assert list(home.iterdir()) == []


def test_run_end_to_end_with_config_file(write_config, raw_config, tools, home, tmp_path):
    path = write_config(raw_config)
    summary = run(
        config_path=str(path),
        log_path=str(tmp_path / "setup.log"),
        platform_name="macos",
        home=home,
        tools=tools,
    )

    assert summary.ok
    settings = home / "Library/Application Support/Code/User/settings.json"
    assert json.loads(settings.read_text(encoding="utf-8")) == {"workbench.colorTheme": "GitHub Dark Default"}


def test_verification_counts_failing_check_as_missing(make_ctx, tools):
    tools.packages.installed.update({"visual-studio-code", "visual-studio-code-insiders", "vlc"})

    def _is_installed(app):
        if app.package_id == "gh":
            raise OSError("brew crashed")
        return app.package_id in tools.packages.installed

    tools.packages.is_installed = _is_installed
    report = verify_installation(make_ctx())

    assert report.missing == ["GitHub CLI"]
    assert not report.ok
