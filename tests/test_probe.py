from __future__ import annotations

from booth_setup.lib.platforms import AppSpec
from booth_setup.lib.probe import Prober
from tests.conftest import FakePackageManager

SENTINEL = "# Setup-script-configured=true"


def test_application_probe_delegates_without_mutating():
    pm = FakePackageManager(installed={"vlc"})
    prober = Prober(pm)

    assert prober.is_application_installed(AppSpec("media_player", "VLC", "vlc"))
    assert not prober.is_application_installed(AppSpec("cli", "GitHub CLI", "gh"))
    assert pm.calls == []


def test_missing_file_is_not_marked(tmp_path):
    assert not Prober(FakePackageManager()).is_config_marked(tmp_path / "vlcrc", SENTINEL)


def test_exact_line_match(tmp_path):
    p = tmp_path / "vlcrc"
    prober = Prober(FakePackageManager())

    p.write_text(f"loop=0\n{SENTINEL}\nloop=1\n", encoding="utf-8")
    assert prober.is_config_marked(p, SENTINEL)

    p.write_text(f"loop=0\n{SENTINEL} extra\n", encoding="utf-8")
    assert not prober.is_config_marked(p, SENTINEL)

    p.write_text(f"{SENTINEL}\r\n", encoding="utf-8")
    assert prober.is_config_marked(p, SENTINEL)


def test_missing_applications():
    pm = FakePackageManager(installed={"gh"})
    apps = [AppSpec("cli", "GitHub CLI", "gh"), AppSpec("media_player", "VLC", "vlc", cask=True)]
    assert [a.name for a in Prober(pm).missing_applications(apps)] == ["VLC"]
