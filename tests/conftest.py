from __future__ import annotations

import re
from typing import Dict, List, Tuple

import pytest

from workstation_setup import main as main_mod
from workstation_setup.lib import command, elevation, power, registry, winget, wsl
from workstation_setup.lib.command import CmdResult
from workstation_setup.steps import step_60_install_font_utility

NO_APPLICATIONS_FOUND = -1978335212


class FakeRunner:
    """Scripted stand-in for run_cmd that models winget, AppX, Defender and WSL."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.envs: List[Dict[str, str]] = []
        self.installed: set[str] = set()
        self.install_results: Dict[str, Tuple[int, str]] = {}
        self.appx: Dict[str, List[str]] = {}
        self.appx_query_failures: set[str] = set()
        self.remove_failures: set[str] = set()
        self.mp_preferences: Dict[str, int] = {}
        self.wsl_result: Tuple[int, str] = (0, "The requested operation is successful.")
        self.other_results: Dict[str, Tuple[int, str]] = {}

    def __call__(self, argv, *, check=False, env=None, cwd=None, dry_run=False) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        self.envs.append(dict(env or {}))
        if dry_run:
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

        if argv[:2] == ["winget", "list"]:
            ident = argv[3]
            if ident in self.installed:
                return self._result(argv, 0, f"Name  Id  Version\n----\n{ident}  {ident}  1.0\n")
            return self._result(argv, NO_APPLICATIONS_FOUND, "No installed package found matching input criteria.")

        if argv[:2] == ["winget", "install"]:
            ident = argv[3]
            rc, out = self.install_results.get(ident, (0, "Successfully installed"))
            if rc == 0:
                self.installed.add(ident)
            return self._result(argv, rc, out)

        if argv[0] == "powershell":
            return self._powershell(argv, argv[-1])

        if argv[0] == "wsl":
            return self._result(argv, *self.wsl_result)

        rc, out = self.other_results.get(argv[0], (0, ""))
        return self._result(argv, rc, out)

    def _powershell(self, argv: List[str], script: str) -> CmdResult:
        quoted = re.findall(r"'([^']*)'", script)
        if script.startswith("Get-AppxPackage"):
            if quoted[0] in self.appx_query_failures:
                return self._result(argv, 1, "Get-AppxPackage : The term 'Get-AppxPackage' is not recognized")
            return self._result(argv, 0, "\n".join(self.appx.get(quoted[0], [])))
        if script.startswith("Remove-AppxPackage"):
            if quoted[0] in self.remove_failures:
                return self._result(argv, 1, "Deployment failed with HRESULT: 0x80073CFA")
            return self._result(argv, 0, "")
        m = re.match(r"\(Get-MpPreference\)\.(\w+)", script)
        if m:
            return self._result(argv, 0, str(self.mp_preferences.get(m.group(1), 0)))
        m = re.match(r"Set-MpPreference -(\w+) (\d+)", script)
        if m:
            self.mp_preferences[m.group(1)] = int(m.group(2))
            return self._result(argv, 0, "")
        return self._result(argv, 0, "")

    @staticmethod
    def _result(argv: List[str], rc: int, out: str) -> CmdResult:
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    @property
    def mutating_calls(self) -> List[List[str]]:
        out = []
        for argv in self.calls:
            script = argv[-1] if argv and argv[0] == "powershell" else ""
            if (
                argv[:2] == ["winget", "install"]
                or argv[0] in {"wsl", "shutdown"}
                or "oh-my-posh" in argv[0]
                or script.startswith(("Remove-AppxPackage", "Set-MpPreference"))
            ):
                out.append(argv)
        return out


class _Key:
    def __init__(self, hive, path):
        self.hive = hive
        self.path = path

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeWinreg:
    HKEY_CURRENT_USER = 1
    HKEY_LOCAL_MACHINE = 2
    KEY_READ = 0x20019
    KEY_SET_VALUE = 0x0002
    KEY_WOW64_64KEY = 0x0100
    REG_SZ = 1
    REG_EXPAND_SZ = 2
    REG_DWORD = 4

    def __init__(self) -> None:
        self.keys: Dict[Tuple[int, str], Dict[str, int]] = {}
        self.writes: List[Tuple[int, str, str, int]] = []
        self.accesses: List[Tuple[int, str, int]] = []
        self.deny_writes = False

    def OpenKey(self, hive, path, reserved=0, access=KEY_READ):
        self.accesses.append((hive, path, access))
        if (hive, path) not in self.keys:
            raise FileNotFoundError(path)
        return _Key(hive, path)

    def QueryValueEx(self, key, name):
        values = self.keys[(key.hive, key.path)]
        if name not in values:
            raise FileNotFoundError(name)
        value = values[name]
        return value, self.REG_EXPAND_SZ if isinstance(value, str) else self.REG_DWORD

    def ExpandEnvironmentStrings(self, value):
        return value.replace("%SystemRoot%", "Windows")

    def CreateKeyEx(self, hive, path, reserved=0, access=KEY_SET_VALUE):
        self.accesses.append((hive, path, access))
        if self.deny_writes:
            raise PermissionError(5, "Access is denied")
        self.keys.setdefault((hive, path), {})
        return _Key(hive, path)

    def SetValueEx(self, key, name, reserved, kind, value):
        self.keys[(key.hive, key.path)][name] = value
        self.writes.append((key.hive, key.path, name, value))


@pytest.fixture
def fake_cmd(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    for module in (command, winget, wsl, power, step_60_install_font_utility):
        monkeypatch.setattr(module, "run_cmd", runner)
    monkeypatch.setattr(winget.shutil, "which", lambda name, path=None: rf"C:\Tools\{name}.exe")
    monkeypatch.setattr(elevation, "is_admin", lambda: True)
    return runner


@pytest.fixture
def fake_winreg(monkeypatch) -> FakeWinreg:
    fake = FakeWinreg()
    monkeypatch.setattr(registry, "winreg", fake)
    return fake


@pytest.fixture
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(main_mod, "configure_logging", lambda log_path, verbose=False: log_path)
