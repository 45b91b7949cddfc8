from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest

from booth_setup.config import SetupConfig, WebShortcut
from booth_setup.context import Collaborators, SetupCtx
from booth_setup.errors import CommandError
from booth_setup.lib.platforms import AppSpec, PlatformProfile, macos_profile


class FakePackageManager:
    name = "fakepm"

    def __init__(self, installed: Optional[Set[str]] = None, fail: Optional[Set[str]] = None, available: bool = True):
        self.installed = set(installed or ())
        self.fail = set(fail or ())
        self.available = available
        self.calls: List[tuple] = []

    def is_available(self) -> bool:
        return self.available

    def bootstrap(self) -> None:
        self.calls.append(("bootstrap",))
        self.available = True

    def update(self) -> None:
        self.calls.append(("update",))

    def is_installed(self, app: AppSpec) -> bool:
        return app.package_id in self.installed

    def install(self, app: AppSpec) -> None:
        self.calls.append(("install", app.package_id))
        if app.package_id in self.fail:
            raise CommandError(["fakepm", "install", app.package_id], 1, "no such package")
        self.installed.add(app.package_id)


class FakeEditor:
    def __init__(self, available: bool = True, installed: Optional[Set[str]] = None, fail: Optional[Set[str]] = None):
        self.available = available
        self.installed = set(installed or ())
        self.fail = set(fail or ())
        self.calls: List[tuple] = []

    def is_available(self) -> bool:
        return self.available

    def list_extensions(self) -> Set[str]:
        return {i.lower() for i in self.installed}

    def install_extension(self, extension_id: str) -> None:
        self.calls.append(("install_extension", extension_id))
        if extension_id in self.fail:
            raise CommandError(["code", "--install-extension", extension_id], 1, "not found in marketplace")
        self.installed.add(extension_id)


class FakeCliTool:
    def __init__(
        self,
        available: bool = True,
        authenticated: bool = True,
        login_succeeds: bool = True,
        installed: Optional[Set[str]] = None,
        fail: Optional[Set[str]] = None,
    ):
        self.available = available
        self.authenticated = authenticated
        self.login_succeeds = login_succeeds
        self.installed = set(installed or ())
        self.fail = set(fail or ())
        self.calls: List[tuple] = []

    def is_available(self) -> bool:
        return self.available

    def is_authenticated(self) -> bool:
        return self.authenticated

    def login(self) -> None:
        self.calls.append(("login",))
        if self.login_succeeds:
            self.authenticated = True

    def list_extensions(self) -> Set[str]:
        return {i.lower() for i in self.installed}

    def install_extension(self, extension_id: str) -> None:
        self.calls.append(("install_extension", extension_id))
        if extension_id in self.fail:
            raise CommandError(["gh", "extension", "install", extension_id], 1, "repository not found")
        self.installed.add(extension_id)


class FakeBrowser:
    name = "FakeBrowser"

    def __init__(self, available: bool = True, web_app_dir: Optional[Path] = None, suffix: str = ".app"):
        self.available = available
        self.opened: List[str] = []
        # Simulates the operator completing the install right after the page opens.
        self.web_app_dir = web_app_dir
        self.suffix = suffix
        self.names_by_url: Dict[str, str] = {}

    def is_available(self) -> bool:
        return self.available

    def open(self, url: str) -> None:
        self.opened.append(url)
        name = self.names_by_url.get(url)
        if self.web_app_dir is not None and name:
            self.web_app_dir.mkdir(parents=True, exist_ok=True)
            (self.web_app_dir / f"{name}{self.suffix}").mkdir(exist_ok=True)


class FakePrompter:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def wait_for_confirmation(self, message: str) -> None:
        self.messages.append(message)


class FakeProcesses:
    def __init__(self) -> None:
        self.stopped: List[str] = []

    def stop(self, process_name: str) -> None:
        self.stopped.append(process_name)


def mutating_calls(tools: Collaborators) -> List[Any]:
    """Everything a run did to the machine or the operator, in one list."""
    calls: List[Any] = [c for c in tools.packages.calls if c[0] != "update"]
    for key, editor in sorted(tools.editors.items()):
        calls += [(key, *c) for c in editor.calls]
    calls += tools.cli_tool.calls
    calls += [("open", u) for u in tools.browser.opened]
    calls += [("prompt", m) for m in tools.prompter.messages]
    calls += [("stop", p) for p in tools.processes.stopped]
    return calls


RAW_CONFIG: Dict[str, Any] = {
    "vscode_theme": "GitHub Dark Default",
    "vs_code_extensions": ["GitHub.copilot", "GitHub.copilot-chat"],
    "gh_cli_extensions": ["github/gh-copilot"],
    "pwa_sites": [{"name": "Copilot", "url": "https://github.com/copilot"}],
    "demo_sites": ["https://a.example", "https://b.example"],
    "vlc_settings": "video-title-show=0\nloop=1",
}


@pytest.fixture
def raw_config() -> Dict[str, Any]:
    return json.loads(json.dumps(RAW_CONFIG))


@pytest.fixture
def write_config(tmp_path):
    def _write(raw: Any, name: str = "config.json") -> Path:
        p = tmp_path / name
        p.write_text(raw if isinstance(raw, str) else json.dumps(raw), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def home(tmp_path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def profile(home) -> PlatformProfile:
    return macos_profile(home=home)


@pytest.fixture
def config() -> SetupConfig:
    return SetupConfig(
        editor_theme="GitHub Dark Default",
        editor_extension_ids=("GitHub.copilot", "GitHub.copilot-chat"),
        cli_extension_ids=("github/gh-copilot",),
        web_shortcuts=(WebShortcut("Copilot", "https://github.com/copilot"),),
        demo_sites=("https://a.example", "https://b.example"),
        media_player_settings="video-title-show=0\nloop=1",
    )


@pytest.fixture
def tools(profile) -> Collaborators:
    browser = FakeBrowser(web_app_dir=profile.web_app_dir, suffix=profile.web_app_suffix)
    browser.names_by_url = {"https://github.com/copilot": "Copilot"}
    return Collaborators(
        packages=FakePackageManager(),
        editors={e.key: FakeEditor() for e in profile.editors},
        cli_tool=FakeCliTool(),
        browser=browser,
        prompter=FakePrompter(),
        processes=FakeProcesses(),
    )


@pytest.fixture
def make_ctx(config, profile, tools):
    def _make(**overrides) -> SetupCtx:
        kwargs = dict(config=config, profile=profile, tools=tools)
        kwargs.update(overrides)
        return SetupCtx(**kwargs)

    return _make


@pytest.fixture
def ctx(make_ctx) -> SetupCtx:
    return make_ctx()
